"""Tests for best-for listings"""

import pytest

from findaly.services.best_list import (
    BestListService,
    score_for_use_case,
    parse_pricing_filter,
    clamp_page,
)


@pytest.fixture
def best_catalog(catalog):
    catalog.category("crm", "CRM")
    catalog.use_case("startups", "Startups")

    catalog.tool("plain", use_cases=["startups"], pricing="FREE")
    catalog.tool(
        "rich",
        use_cases=["startups", "sales", "smb"],
        features=["a", "b", "c", "d", "e", "f"],
        integrations=["x", "y", "z", "w"],
        audience=["founders", "smb"],
        pricing="PAID",
    )
    catalog.tool("star", use_cases=["startups"], featured=True, pricing="FREEMIUM")
    catalog.tool("hidden", use_cases=["startups"], status="DRAFT")
    catalog.tool("elsewhere", category="helpdesk", use_cases=["startups"])

    return catalog


def test_score_for_use_case(best_catalog):
    """Featured bonus plus capped counts of use-cases, features, integrations, audience"""

    store = best_catalog.store

    assert score_for_use_case(store.tools["plain"]) == 1.0
    # 3 use-cases + 6/3 features + 4/4 integrations + 2/4 audience
    assert score_for_use_case(store.tools["rich"]) == 6.5
    assert score_for_use_case(store.tools["star"]) == 11.0


def test_score_for_use_case_caps_counts(catalog):
    tool = catalog.tool(
        "maxed",
        use_cases=[f"u{i}" for i in range(10)],
        features=[f"f{i}" for i in range(20)],
        integrations=[f"i{i}" for i in range(20)],
        audience=[f"a{i}" for i in range(20)],
    )

    # 6 + 12/3 + 12/4 + 8/4
    assert score_for_use_case(tool) == 15.0


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("free,paid", ["FREE", "PAID"]),
        (" Freemium , FREE ,free", ["FREEMIUM", "FREE"]),
        (["enterprise", "bogus"], ["ENTERPRISE"]),
        ("bogus", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_pricing_filter(raw, expected):
    assert parse_pricing_filter(raw) == expected


@pytest.mark.parametrize("raw,expected", [(3, 3), ("2", 2), ("0", 1), (-5, 1), (999, 200), ("abc", 1), (None, 1)])
def test_clamp_page(raw, expected):
    assert clamp_page(raw, 200) == expected


def test_list_best_ranks_by_use_case_score(best_catalog):
    service = BestListService(best_catalog.store, page_size=12)

    listing = service.list_best("crm-tools-for-startups")

    assert listing.title == "Best CRM tools for Startups"
    assert [e.tool.slug for e in listing.tools] == ["star", "rich", "plain"]
    assert [e.rank for e in listing.tools] == [1, 2, 3]
    assert listing.total == 3
    assert listing.total_pages == 1
    assert [p.href for p in listing.compare_pairs] == [
        "/compare/star-vs-rich",
        "/compare/rich-vs-plain",
    ]


def test_list_best_pricing_filter(best_catalog):
    service = BestListService(best_catalog.store)

    listing = service.list_best("crm-tools-for-startups", pricing="free,paid")

    assert [e.tool.slug for e in listing.tools] == ["rich", "plain"]
    assert listing.total == 2


def test_list_best_pagination(best_catalog):
    service = BestListService(best_catalog.store, page_size=2)

    first = service.list_best("crm-tools-for-startups", page=1)
    second = service.list_best("crm-tools-for-startups", page=2)

    assert first.total_pages == 2
    assert len(first.tools) == 2
    assert len(second.tools) == 1
    assert second.page == 2
    assert service.list_best("crm-tools-for-startups", page=3) is None


@pytest.mark.parametrize(
    "token",
    ["crm-for-startups", "missing-tools-for-startups", "crm-tools-for-missing"],
)
def test_list_best_unresolvable(best_catalog, token):
    assert BestListService(best_catalog.store).list_best(token) is None
