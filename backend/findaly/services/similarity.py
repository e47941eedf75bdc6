"""Set-overlap metrics used to compare tools"""

from typing import Iterable, Set


def normalize_terms(values: Iterable[str]) -> Set[str]:
    """Lowercase, trim and drop blank values"""
    return {v.strip().lower() for v in (values or []) if v and v.strip()}


def overlap_count(a: Iterable[str], b: Iterable[str]) -> int:
    """Size of the case-insensitive intersection"""
    return len(normalize_terms(a) & normalize_terms(b))


def jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    """
    Case-insensitive Jaccard similarity

    Two empty sets score 0.0 rather than being undefined.
    """
    set_a = normalize_terms(a)
    set_b = normalize_terms(b)

    union = len(set_a | set_b)
    if union == 0:
        return 0.0

    return len(set_a & set_b) / union
