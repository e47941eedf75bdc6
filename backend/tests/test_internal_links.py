"""Tests for the internal linking engine"""

import pytest

from findaly.config import LinkingLimits
from findaly.schemas.links import LinkKind
from findaly.services.alternatives import AlternativesService
from findaly.services.cache import MemoryTTLCache
from findaly.services.internal_links import InternalLinkingEngine


@pytest.fixture
def sample_catalog(catalog):
    """CRM category with four active tools, one draft, plus a helpdesk tool"""

    catalog.category("crm", "CRM")
    catalog.category("helpdesk", "Helpdesk")
    catalog.use_case("startups", "Startups")
    catalog.use_case("sales", "Sales Teams")

    catalog.tool("acme", category="crm", use_cases=["startups", "sales"], featured=True)
    catalog.tool("beta", category="crm", use_cases=["startups"])
    catalog.tool("gamma", category="crm", use_cases=["sales"])
    catalog.tool("delta", category="crm")
    catalog.tool("draft-crm", category="crm", use_cases=["startups"], status="DRAFT")
    catalog.tool("zed", category="helpdesk", use_cases=["startups"])

    return catalog


@pytest.fixture
def engine(sample_catalog):
    store = sample_catalog.store
    return InternalLinkingEngine(store, AlternativesService(store))


def _hrefs(links):
    return [link.href for link in links]


def _all_hrefs(bundle):
    return [link["href"] for group in bundle.model_dump().values() for link in group]


def test_tool_links(engine):
    """Tool page links to its hubs, ranked alternatives, comparisons and best pages"""

    links = engine.tool_links("acme")

    assert _hrefs(links.category) == ["/tools/category/crm"]
    assert links.category[0].label == "CRM tools"

    assert links.alternatives[0].href == "/alternatives/acme"
    alt_tools = links.alternatives[1:]
    assert 1 <= len(alt_tools) <= 5
    assert all(link.kind == LinkKind.TOOL for link in alt_tools)
    assert "/tools/acme" not in _hrefs(alt_tools)
    assert "/tools/draft-crm" not in _hrefs(alt_tools)

    assert len(links.comparisons) <= 3
    assert all(href.startswith("/compare/acme-vs-") for href in _hrefs(links.comparisons))

    assert _hrefs(links.best) == [
        "/best/crm-tools-for-startups",
        "/best/crm-tools-for-sales",
    ]
    assert links.best[1].label == "Best CRM tools for Sales Teams"


def test_tool_links_follow_ranking(engine):
    """Alternative links keep the ranker's order and scores"""

    links = engine.tool_links("acme")
    ranked = engine.alternatives.rank_alternatives("acme").alternatives

    assert _hrefs(links.alternatives[1:]) == [f"/tools/{r.tool.slug}" for r in ranked[:5]]
    assert [l.score for l in links.alternatives[1:]] == [r.score for r in ranked[:5]]


def test_alternatives_links(engine):
    """Alternatives page links to the tool, its category, top alternatives and comparisons"""

    links = engine.alternatives_links("beta")

    assert _hrefs(links.primary) == ["/tools/beta", "/tools/category/crm"]
    assert links.top_alternatives
    assert "/tools/beta" not in _hrefs(links.top_alternatives)
    assert all(href.startswith("/compare/beta-vs-") for href in _hrefs(links.comparisons))


def test_compare_links(engine):
    """Compare page links to both tools, both hubs and shared best pages"""

    links = engine.compare_links("acme-vs-beta")

    assert _hrefs(links.primary) == [
        "/tools/acme",
        "/alternatives/acme",
        "/tools/beta",
        "/alternatives/beta",
    ]
    # Same category is linked once
    assert _hrefs(links.categories) == ["/tools/category/crm"]
    assert _hrefs(links.best) == ["/best/crm-tools-for-startups"]


def test_compare_links_across_categories(engine):
    links = engine.compare_links("acme-vs-zed")

    assert _hrefs(links.categories) == ["/tools/category/crm", "/tools/category/helpdesk"]
    assert _hrefs(links.best) == ["/best/crm-tools-for-startups"]


def test_compare_links_deduplicate_same_tool(engine):
    links = engine.compare_links("acme-vs-acme")

    assert _hrefs(links.primary) == ["/tools/acme", "/alternatives/acme"]


def test_category_links(engine):
    """Use-cases by frequency (ties alphabetical), fixed comparison pairs, alternatives hubs"""

    links = engine.category_links("crm")

    # startups and sales both tag two active tools; "Sales Teams" sorts first
    assert _hrefs(links.use_cases) == ["/use-cases/sales", "/use-cases/startups"]
    assert _hrefs(links.best) == [
        "/best/crm-tools-for-sales",
        "/best/crm-tools-for-startups",
    ]

    # acme is featured, then name order: beta, delta, gamma
    assert _hrefs(links.comparisons) == [
        "/compare/acme-vs-beta",
        "/compare/acme-vs-delta",
        "/compare/acme-vs-gamma",
        "/compare/beta-vs-delta",
        "/compare/beta-vs-gamma",
        "/compare/delta-vs-gamma",
    ]
    assert _hrefs(links.alternatives) == [
        "/alternatives/acme",
        "/alternatives/beta",
        "/alternatives/delta",
        "/alternatives/gamma",
    ]


def test_category_links_frequency_beats_alphabet(catalog):
    catalog.tool("a", category="crm", use_cases=["zoo", "apple"])
    catalog.tool("b", category="crm", use_cases=["zoo"])
    engine = InternalLinkingEngine(catalog.store, AlternativesService(catalog.store))

    links = engine.category_links("crm")

    assert _hrefs(links.use_cases) == ["/use-cases/zoo", "/use-cases/apple"]


def test_category_comparisons_respect_available_slots(catalog):
    """Two tools give a single pair"""

    catalog.tool("a", category="crm")
    catalog.tool("b", category="crm")
    engine = InternalLinkingEngine(catalog.store, AlternativesService(catalog.store))

    links = engine.category_links("crm")

    assert _hrefs(links.comparisons) == ["/compare/a-vs-b"]


def test_category_comparisons_respect_limit(sample_catalog):
    limits = LinkingLimits()
    limits.category.comparisons = 2
    store = sample_catalog.store
    engine = InternalLinkingEngine(store, AlternativesService(store), limits)

    links = engine.category_links("crm")

    assert _hrefs(links.comparisons) == ["/compare/acme-vs-beta", "/compare/acme-vs-delta"]


def test_best_links(engine):
    """Best-for page links to its hubs, listed tools and adjacent comparisons"""

    links = engine.best_links("crm-tools-for-startups")

    assert _hrefs(links.primary) == [
        "/tools/category/crm",
        "/use-cases/startups",
        "/best/crm-tools-for-startups",
    ]
    # draft-crm is excluded, zed is in another category
    assert _hrefs(links.tools) == ["/tools/acme", "/tools/beta"]
    assert _hrefs(links.comparisons) == ["/compare/acme-vs-beta"]
    assert _hrefs(links.alternatives) == ["/alternatives/acme", "/alternatives/beta"]


def test_best_links_adjacent_pairs_are_capped(catalog):
    for i in range(10):
        catalog.tool(f"t{i}", category="crm", use_cases=["startups"])
    engine = InternalLinkingEngine(catalog.store, AlternativesService(catalog.store))

    links = engine.best_links("crm-tools-for-startups")

    assert len(links.tools) == 8
    # Pairs come from the first six tools only
    assert _hrefs(links.comparisons) == [f"/compare/t{i}-vs-t{i + 1}" for i in range(5)]
    assert len(links.alternatives) == 6


@pytest.mark.parametrize(
    "method,identity",
    [
        ("tool_links", "missing"),
        ("alternatives_links", "missing"),
        ("compare_links", "acme"),
        ("compare_links", "acme-vs-beta-vs-gamma"),
        ("compare_links", "acme-vs-missing"),
        ("category_links", "missing"),
        ("category_links", "  "),
        ("best_links", "crm-for-startups"),
        ("best_links", "crm-tools-for-missing"),
        ("best_links", "missing-tools-for-startups"),
    ],
)
def test_unresolvable_identities_give_empty_bundles(engine, method, identity):
    """No exception, every group an empty list"""

    bundle = getattr(engine, method)(identity)

    assert bundle.model_dump()
    assert all(group == [] for group in bundle.model_dump().values())


@pytest.mark.parametrize(
    "method,identity",
    [
        ("tool_links", "acme"),
        ("alternatives_links", "acme"),
        ("compare_links", "acme-vs-beta"),
        ("category_links", "crm"),
        ("best_links", "crm-tools-for-startups"),
    ],
)
def test_groups_have_unique_hrefs(engine, method, identity):
    bundle = getattr(engine, method)(identity)

    for group in bundle.model_dump().values():
        hrefs = [link["href"] for link in group]
        assert len(hrefs) == len(set(hrefs))


def test_links_never_point_at_draft_tools(engine):
    for bundle in (
        engine.tool_links("acme"),
        engine.category_links("crm"),
        engine.best_links("crm-tools-for-startups"),
        engine.compare_links("acme-vs-draft-crm"),
        engine.compare_links("draft-crm-vs-beta"),
    ):
        assert not any("draft-crm" in href for href in _all_hrefs(bundle))


def test_bundles_are_cached_until_ttl_elapses(sample_catalog):
    """Catalog edits show up only after the revalidation window"""

    now = [0.0]
    cache = MemoryTTLCache(ttl=60, clock=lambda: now[0])
    store = sample_catalog.store
    engine = InternalLinkingEngine(store, AlternativesService(store), cache=cache)

    first = engine.category_links("crm")
    sample_catalog.tool("aardvark", category="crm", featured=True)

    now[0] = 59.0
    assert engine.category_links("crm") == first

    now[0] = 61.0
    refreshed = engine.category_links("crm")
    assert "/alternatives/aardvark" in _hrefs(refreshed.alternatives)


def test_cache_keys_are_per_identity(sample_catalog):
    cache = MemoryTTLCache(ttl=60)
    store = sample_catalog.store
    engine = InternalLinkingEngine(store, AlternativesService(store), cache=cache)

    acme = engine.alternatives_links("acme")
    beta = engine.alternatives_links("beta")

    assert acme != beta
    assert cache.get(cache.make_key("alternatives-internal-links", "acme")) is not None
    assert cache.get(cache.make_key("alternatives-internal-links", "beta")) is not None


def test_compare_with_inactive_tool_is_empty(engine):
    links = engine.compare_links("acme-vs-draft-crm")

    assert links == engine.compare_links("missing-vs-acme")
    assert _all_hrefs(links) == []
