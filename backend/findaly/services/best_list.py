"""Best-for listings: top tools for a (category, use-case) pair"""

import math
from typing import Any, List, Optional

from ..config import settings
from ..models.tool import PricingModel
from ..schemas.catalog import ToolSnapshot
from ..schemas.best import BestListing, BestListingEntry, ComparePair
from ..utils.logging import get_logger
from .alternatives import round_score
from .catalog import CatalogStore
from .link_rules import parse_best_slug, compare_path

logger = get_logger(__name__)

PRICING_KEYS = {
    "free": PricingModel.FREE.value,
    "freemium": PricingModel.FREEMIUM.value,
    "paid": PricingModel.PAID.value,
    "enterprise": PricingModel.ENTERPRISE.value,
}

MAX_COMPARE_TOOLS = 6


def score_for_use_case(tool: ToolSnapshot) -> float:
    """Decision-first heuristic rewarding featured and well-described tools"""
    score = 10.0 if tool.is_featured else 0.0
    score += min(len(tool.use_cases), 6)
    score += min(len(tool.key_features), 12) / 3
    score += min(len(tool.integrations), 12) / 4
    score += min(len(tool.target_audience), 8) / 4
    return round_score(score)


def parse_pricing_filter(raw: Any) -> Optional[List[str]]:
    """
    Parse "free,paid" (or a list of keys) into pricing model values

    Unknown keys are ignored; returns None when nothing usable remains.
    """
    if isinstance(raw, (list, tuple)):
        raw = ",".join(str(x) for x in raw)

    keys = [k.strip().lower() for k in str(raw or "").split(",") if k.strip()]
    models = []
    for key in keys:
        value = PRICING_KEYS.get(key)
        if value and value not in models:
            models.append(value)

    return models or None


def clamp_page(raw: Any, maximum: int) -> int:
    try:
        page = int(float(raw))
    except (TypeError, ValueError):
        return 1
    return min(maximum, max(1, page))


class BestListService:
    """Paginated, scored listing behind each best-for page"""

    def __init__(self, store: CatalogStore, page_size: Optional[int] = None, max_page: Optional[int] = None):
        self.store = store
        self.page_size = page_size or settings.BEST_PAGE_SIZE
        self.max_page = max_page or settings.BEST_MAX_PAGE

    def list_best(self, best_slug: str, page: Any = 1, pricing: Any = None) -> Optional[BestListing]:
        """
        Get one page of the best tools for "<category>-tools-for-<use-case>"

        Returns None when the slug does not parse, the category or use-case
        is unknown, or the requested page has no tools.
        """

        parsed = parse_best_slug(best_slug)
        if parsed is None:
            return None

        category = self.store.get_category_by_slug(parsed.category)
        use_case = self.store.get_use_case_by_slug(parsed.use_case)
        if category is None or use_case is None:
            return None

        pricing_models = parse_pricing_filter(pricing)
        page = clamp_page(page, self.max_page)

        total = self.store.count_tools_by_category_and_use_case(category.id, use_case.id, pricing_models)
        tools = self.store.list_tools_by_category_and_use_case(
            category.id,
            use_case.id,
            limit=self.page_size,
            offset=(page - 1) * self.page_size,
            pricing_models=pricing_models,
        )

        if not tools:
            logger.debug("Empty best-for page", slug=best_slug, page=page)
            return None

        scored = sorted(
            ((score_for_use_case(t), t) for t in tools),
            key=lambda pair: (-pair[0], pair[1].name),
        )
        entries = [
            BestListingEntry(tool=tool, score=score, rank=rank)
            for rank, (score, tool) in enumerate(scored, 1)
        ]

        head = [e.tool for e in entries[:MAX_COMPARE_TOOLS]]
        pairs = [
            ComparePair(
                left_slug=a.slug,
                left_name=a.name,
                right_slug=b.slug,
                right_name=b.name,
                href=compare_path(a.slug, b.slug),
            )
            for a, b in zip(head, head[1:])
        ]

        return BestListing(
            category=category,
            use_case=use_case,
            title=f"Best {category.name} tools for {use_case.name}",
            page=page,
            total_pages=max(1, math.ceil(total / self.page_size)),
            total=total,
            tools=entries,
            compare_pairs=pairs,
        )
