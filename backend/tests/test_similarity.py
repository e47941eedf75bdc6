"""Tests for set-overlap metrics"""

import pytest

from findaly.services.similarity import jaccard, overlap_count, normalize_terms


def test_jaccard_of_two_empty_sets_is_zero():
    """Empty vs empty is defined as 0, not NaN"""

    assert jaccard([], []) == 0.0
    assert jaccard(None, None) == 0.0
    assert jaccard(["  ", ""], []) == 0.0


@pytest.mark.parametrize(
    "a,b",
    [
        (["startups", "sales"], ["startups"]),
        (["a", "b", "c"], ["c", "d"]),
        ([], ["x"]),
        (["Email"], ["email", "sms"]),
    ],
)
def test_jaccard_is_symmetric(a, b):
    """jaccard(A, B) == jaccard(B, A)"""

    assert jaccard(a, b) == jaccard(b, a)


def test_jaccard_values():
    """Intersection over union"""

    assert jaccard(["startups", "sales"], ["startups"]) == 0.5
    assert jaccard(["a", "b"], ["a", "b"]) == 1.0
    assert jaccard(["a"], ["b"]) == 0.0


def test_jaccard_is_case_insensitive_and_trims():
    """Values are compared lowercased and stripped"""

    assert jaccard([" Slack ", "ZAPIER"], ["slack", "zapier"]) == 1.0


def test_duplicates_do_not_inflate_scores():
    """Inputs are treated as sets"""

    assert jaccard(["a", "a", "A"], ["a"]) == 1.0
    assert overlap_count(["a", "A", "b"], ["a", "b", "b"]) == 2


def test_overlap_count():
    """Raw intersection size"""

    assert overlap_count(["Slack", "Gmail", "Zapier"], ["slack", "zapier", "hubspot"]) == 2
    assert overlap_count([], ["slack"]) == 0


def test_normalize_terms_drops_blanks():
    assert normalize_terms(["  CRM ", "", "   ", "crm"]) == {"crm"}
