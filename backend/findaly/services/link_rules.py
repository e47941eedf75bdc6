"""Path conventions and small helpers shared by the link builders"""

from typing import Iterable, List, NamedTuple, Optional

from ..schemas.links import LinkItem

COMPARE_SEPARATOR = "-vs-"
BEST_MARKER = "-tools-for-"


class ComparePair(NamedTuple):
    left: str
    right: str


class BestSlug(NamedTuple):
    category: str
    use_case: str


def tool_path(slug: str) -> str:
    return f"/tools/{slug}"


def category_path(slug: str) -> str:
    return f"/tools/category/{slug}"


def alternatives_path(slug: str) -> str:
    return f"/alternatives/{slug}"


def compare_path(left: str, right: str) -> str:
    return f"/compare/{left}{COMPARE_SEPARATOR}{right}"


def best_path(category_slug: str, use_case_slug: str) -> str:
    return f"/best/{category_slug}{BEST_MARKER}{use_case_slug}"


def use_case_path(slug: str) -> str:
    return f"/use-cases/{slug}"


def parse_compare_pair(pair: Optional[str]) -> Optional[ComparePair]:
    """
    Split "a-vs-b" into its two tool slugs

    Returns None unless there are exactly two non-empty parts, so
    "a-vs-b-vs-c" and "a" do not parse.
    """
    parts = [p.strip() for p in str(pair or "").strip().split(COMPARE_SEPARATOR) if p.strip()]
    if len(parts) != 2:
        return None
    return ComparePair(left=parts[0], right=parts[1])


def parse_best_slug(token: Optional[str]) -> Optional[BestSlug]:
    """Split "<category>-tools-for-<use-case>" at the first marker"""
    value = str(token or "").strip()
    category, marker, use_case = value.partition(BEST_MARKER)
    if not marker:
        return None

    category, use_case = category.strip(), use_case.strip()
    if not category or not use_case:
        return None
    return BestSlug(category=category, use_case=use_case)


def uniq_by_href(items: Iterable[LinkItem]) -> List[LinkItem]:
    """Drop later links pointing at an href already seen"""
    seen = set()
    unique = []
    for item in items:
        if item.href in seen:
            continue
        seen.add(item.href)
        unique.append(item)
    return unique


def title_from_slug(slug: str) -> str:
    """'project-management' -> 'Project Management'"""
    return " ".join(w[:1].upper() + w[1:] for w in str(slug or "").split("-") if w)
