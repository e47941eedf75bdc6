"""Internal linking engine for tool, alternatives, compare, category and best pages"""

from collections import Counter
from typing import Callable, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from ..config import LinkingLimits
from ..schemas.catalog import ToolSnapshot
from ..schemas.links import (
    LinkItem,
    LinkKind,
    ToolLinks,
    AlternativesLinks,
    CompareLinks,
    CategoryLinks,
    BestLinks,
)
from ..utils.logging import get_logger
from ..utils.metrics import record_link_bundle
from .alternatives import AlternativesService
from .cache import TTLCache
from .catalog import CatalogStore
from .link_rules import (
    tool_path,
    category_path,
    alternatives_path,
    compare_path,
    best_path,
    use_case_path,
    parse_compare_pair,
    parse_best_slug,
    uniq_by_href,
)

logger = get_logger(__name__)

B = TypeVar("B", bound=BaseModel)

# Index pairs over the first four tools of a category hub
CATEGORY_PAIRS = [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]


def _compare_link(left: ToolSnapshot, right: ToolSnapshot, score: float) -> LinkItem:
    return LinkItem(
        href=compare_path(left.slug, right.slug),
        label=f"{left.name} vs {right.name}",
        kind=LinkKind.COMPARE,
        score=score,
    )


def _alternatives_hub_link(tool: ToolSnapshot, score: float) -> LinkItem:
    return LinkItem(
        href=alternatives_path(tool.slug),
        label=f"{tool.name} alternatives",
        kind=LinkKind.ALTERNATIVES,
        score=score,
    )


def _category_hub_link(tool: ToolSnapshot, score: float) -> LinkItem:
    return LinkItem(
        href=category_path(tool.primary_category.slug),
        label=f"{tool.primary_category.name} tools",
        kind=LinkKind.CATEGORY,
        score=score,
    )


class InternalLinkingEngine:
    """
    Builds the fixed set of cross-link groups for each page kind

    Every public method is a pure function of its identity input and the
    catalog, cached per input for the cache TTL. Identities that do not
    resolve produce an empty bundle instead of an error.
    """

    def __init__(
        self,
        store: CatalogStore,
        alternatives: AlternativesService,
        limits: Optional[LinkingLimits] = None,
        cache: Optional[TTLCache] = None,
    ):
        self.store = store
        self.alternatives = alternatives
        self.limits = limits or LinkingLimits()
        self.cache = cache

    def _cached(self, namespace: str, key: str, compute: Callable[[], B], model: Type[B]) -> B:
        if self.cache is None:
            return compute()
        return self.cache.get_or_compute(namespace, key, compute, model)

    # Public entry points

    def tool_links(self, slug: str) -> ToolLinks:
        return self._cached("tool-internal-links", slug, lambda: self._tool_links(slug), ToolLinks)

    def alternatives_links(self, slug: str) -> AlternativesLinks:
        return self._cached(
            "alternatives-internal-links", slug, lambda: self._alternatives_links(slug), AlternativesLinks
        )

    def compare_links(self, pair: str) -> CompareLinks:
        return self._cached("compare-internal-links", pair, lambda: self._compare_links(pair), CompareLinks)

    def category_links(self, category_slug: str) -> CategoryLinks:
        return self._cached(
            "category-internal-links", category_slug, lambda: self._category_links(category_slug), CategoryLinks
        )

    def best_links(self, best_slug: str) -> BestLinks:
        return self._cached("best-internal-links", best_slug, lambda: self._best_links(best_slug), BestLinks)

    # Builders

    def _tool_links(self, slug: str) -> ToolLinks:
        """
        Tool page links: category hub, alternatives hub, top ranked
        alternatives, comparisons against them and best-for pages for the
        tool's use-cases
        """
        limits = self.limits.tool

        result = self.alternatives.rank_alternatives(slug)
        if result is None:
            record_link_bundle("tool", resolved=False)
            return ToolLinks()

        tool = result.tool
        ranked = result.alternatives
        category = tool.primary_category

        alt_tool_links = [
            LinkItem(href=tool_path(r.tool.slug), label=r.tool.name, kind=LinkKind.TOOL, score=r.score)
            for r in ranked[: limits.alt_tools]
        ]

        comparisons = [_compare_link(tool, r.tool, 8) for r in ranked[: limits.comparisons]]

        best = [
            LinkItem(
                href=best_path(category.slug, u.slug),
                label=f"Best {category.name} tools for {u.name}",
                kind=LinkKind.BEST,
                score=6,
            )
            for u in tool.use_cases[: limits.best]
        ]

        record_link_bundle("tool", resolved=True)
        return ToolLinks(
            category=uniq_by_href([_category_hub_link(tool, 10)]),
            alternatives=uniq_by_href([_alternatives_hub_link(tool, 9)] + alt_tool_links),
            comparisons=uniq_by_href(comparisons),
            best=uniq_by_href(best),
        )

    def _alternatives_links(self, slug: str) -> AlternativesLinks:
        """Alternatives page links: tool page, category hub, top alternatives and comparisons"""
        limits = self.limits.alternatives

        result = self.alternatives.rank_alternatives(slug)
        if result is None:
            record_link_bundle("alternatives", resolved=False)
            return AlternativesLinks()

        tool = result.tool
        ranked = result.alternatives

        primary = [
            LinkItem(href=tool_path(tool.slug), label=tool.name, kind=LinkKind.TOOL, score=10),
            _category_hub_link(tool, 8),
        ]

        top_alternatives = [
            LinkItem(href=tool_path(r.tool.slug), label=r.tool.name, kind=LinkKind.TOOL, score=r.score)
            for r in ranked[: limits.top_alternatives]
        ]

        comparisons = [_compare_link(tool, r.tool, 7) for r in ranked[: limits.comparisons]]

        record_link_bundle("alternatives", resolved=True)
        return AlternativesLinks(
            primary=uniq_by_href(primary),
            top_alternatives=uniq_by_href(top_alternatives),
            comparisons=uniq_by_href(comparisons),
        )

    def _compare_links(self, pair: str) -> CompareLinks:
        """Compare page links: both tools, both alternatives hubs, both categories, shared best pages"""

        parsed = parse_compare_pair(pair)
        if parsed is None:
            record_link_bundle("compare", resolved=False)
            return CompareLinks()

        left = self.store.get_tool_by_slug(parsed.left)
        right = self.store.get_tool_by_slug(parsed.right)
        if left is None or right is None or not (left.is_active and right.is_active):
            record_link_bundle("compare", resolved=False)
            return CompareLinks()

        primary = [
            LinkItem(href=tool_path(left.slug), label=left.name, kind=LinkKind.TOOL, score=10),
            _alternatives_hub_link(left, 9),
            LinkItem(href=tool_path(right.slug), label=right.name, kind=LinkKind.TOOL, score=10),
            _alternatives_hub_link(right, 9),
        ]

        categories = [_category_hub_link(left, 8), _category_hub_link(right, 8)]

        right_use_cases = set(right.use_case_slugs)
        shared = [u for u in left.use_cases if u.slug in right_use_cases]
        category = left.primary_category
        best = [
            LinkItem(
                href=best_path(category.slug, u.slug),
                label=f"Best {category.name} tools for {u.name}",
                kind=LinkKind.BEST,
                score=6,
            )
            for u in shared[: self.limits.tool.best]
        ]

        record_link_bundle("compare", resolved=True)
        return CompareLinks(
            primary=uniq_by_href(primary),
            categories=uniq_by_href(categories),
            best=uniq_by_href(best),
        )

    def _category_links(self, category_slug: str) -> CategoryLinks:
        """
        Category hub links

        Use-cases are ranked by how many of the hub's tools carry them
        (ties by name); comparisons pair the first four tools.
        """
        limits = self.limits.category

        slug = str(category_slug or "").strip()
        category = self.store.get_category_by_slug(slug) if slug else None
        if category is None:
            record_link_bundle("category", resolved=False)
            return CategoryLinks()

        tools = self.store.list_tools_by_category(category.id, limit=limits.tools)

        counts: Counter = Counter()
        names = {}
        for tool in tools:
            for u in tool.use_cases:
                counts[u.slug] += 1
                names[u.slug] = u.name

        top_use_cases = sorted(counts, key=lambda s: (-counts[s], names[s].lower(), s))[: limits.use_cases]

        best = [
            LinkItem(
                href=best_path(category.slug, s),
                label=f"{category.name} tools for {names[s]}",
                kind=LinkKind.BEST,
                score=10,
            )
            for s in top_use_cases[: limits.best]
        ]

        use_cases = [
            LinkItem(href=use_case_path(s), label=names[s], kind=LinkKind.USE_CASE, score=8)
            for s in top_use_cases
        ]

        top = tools[: limits.top_tools_for_pairs]
        comparisons = []
        for i, j in CATEGORY_PAIRS:
            if len(comparisons) >= limits.comparisons:
                break
            if j >= len(top):
                continue
            comparisons.append(_compare_link(top[i], top[j], 6))

        alternatives = [_alternatives_hub_link(t, 7) for t in tools[: limits.alternatives]]

        record_link_bundle("category", resolved=True)
        return CategoryLinks(
            best=uniq_by_href(best),
            use_cases=uniq_by_href(use_cases),
            comparisons=uniq_by_href(comparisons),
            alternatives=uniq_by_href(alternatives),
        )

    def _best_links(self, best_slug: str) -> BestLinks:
        """Best-for page links: category hub, use-case page, listed tools, adjacent comparisons"""
        limits = self.limits.best

        parsed = parse_best_slug(best_slug)
        if parsed is None:
            record_link_bundle("best", resolved=False)
            return BestLinks()

        category = self.store.get_category_by_slug(parsed.category)
        use_case = self.store.get_use_case_by_slug(parsed.use_case)
        if category is None or use_case is None:
            record_link_bundle("best", resolved=False)
            return BestLinks()

        tools = self.store.list_tools_by_category_and_use_case(category.id, use_case.id, limit=limits.pool)

        primary = [
            LinkItem(href=category_path(category.slug), label=f"Browse {category.name}", kind=LinkKind.CATEGORY, score=10),
            LinkItem(href=use_case_path(use_case.slug), label=use_case.name, kind=LinkKind.USE_CASE, score=9),
            LinkItem(
                href=best_path(category.slug, use_case.slug),
                label=f"Best {category.name} tools for {use_case.name}",
                kind=LinkKind.BEST,
                score=8,
            ),
        ]

        listed = tools[: limits.tools]
        tool_links = [
            LinkItem(href=tool_path(t.slug), label=t.name, kind=LinkKind.TOOL, score=7) for t in listed
        ]

        record_link_bundle("best", resolved=True)
        return BestLinks(
            primary=uniq_by_href(primary),
            tools=uniq_by_href(tool_links),
            comparisons=uniq_by_href(
                self._adjacent_comparisons(tools[: limits.comparisons], limits.comparisons)
            ),
            alternatives=uniq_by_href([_alternatives_hub_link(t, 6) for t in tools[: limits.alternatives]]),
        )

    @staticmethod
    def _adjacent_comparisons(tools: Sequence[ToolSnapshot], limit: int) -> List[LinkItem]:
        comparisons = []
        for left, right in zip(tools, tools[1:]):
            if len(comparisons) >= limit:
                break
            comparisons.append(_compare_link(left, right, 6))
        return comparisons
