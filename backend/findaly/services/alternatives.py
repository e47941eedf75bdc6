"""Alternatives ranking for tool and alternatives pages"""

import math
from typing import Dict, List, Optional, Tuple

from ..config import RankingConfig
from ..schemas.catalog import ToolSnapshot
from ..schemas.alternatives import AlternativesResult, RankedAlternative
from ..utils.logging import get_logger
from ..utils.metrics import track_ranking_time, record_alternatives_ranked
from .catalog import CatalogStore
from .similarity import jaccard, overlap_count

logger = get_logger(__name__)


def round_score(value: float) -> float:
    """Round half up to one decimal place"""
    return math.floor(value * 10 + 0.5) / 10


class AlternativesService:
    """
    Ranks candidate tools by similarity to a source tool

    Candidates come from curated edges, the source's category and, when the
    category is thin, tools sharing a use-case. Each candidate is scored
    with weighted set overlaps plus curated and featured bonuses.
    """

    def __init__(self, store: CatalogStore, config: Optional[RankingConfig] = None):
        self.store = store
        self.config = config or RankingConfig()

    @track_ranking_time("alternatives")
    def rank_alternatives(self, tool_slug: str) -> Optional[AlternativesResult]:
        """
        Get ranked alternatives for a tool

        Args:
            tool_slug: Slug of the source tool

        Returns:
            AlternativesResult, or None if no tool has this slug
        """

        tool = self.store.get_tool_by_slug(tool_slug)
        if not tool:
            logger.debug("Alternatives source not found", slug=tool_slug)
            return None

        curated_tools, curated_lookup = self._load_curated(tool)
        pool = self._candidate_pool(tool)

        # Curated first, then discovered, de-duplicated by id
        merged: Dict[int, ToolSnapshot] = {}
        for candidate in curated_tools + pool:
            if candidate.id == tool.id or not candidate.is_active:
                continue
            merged.setdefault(candidate.id, candidate)

        scored = [
            self.score_candidate(tool, candidate, curated_lookup.get(candidate.id))
            for candidate in merged.values()
        ]
        scored.sort(key=lambda r: (-r.score, r.tool.slug))
        ranked = scored[: self.config.max_results]

        logger.debug(
            "Ranked alternatives",
            slug=tool.slug,
            curated=len(curated_lookup),
            pool=len(pool),
            returned=len(ranked),
        )
        record_alternatives_ranked(len(ranked))

        return AlternativesResult(tool=tool, alternatives=ranked)

    def _load_curated(
        self, tool: ToolSnapshot
    ) -> Tuple[List[ToolSnapshot], Dict[int, Tuple[float, Optional[str]]]]:
        """Split curated edges into candidate tools and a score/note lookup"""

        edges = self.store.list_curated_edges(tool.id, limit=self.config.max_curated)

        candidates = []
        lookup: Dict[int, Tuple[float, Optional[str]]] = {}
        for edge in edges:
            if edge.alternative.id in lookup:
                continue
            candidates.append(edge.alternative)
            lookup[edge.alternative.id] = (edge.manual_score, edge.note)

        return candidates, lookup

    def _candidate_pool(self, tool: ToolSnapshot) -> List[ToolSnapshot]:
        """Same-category pool, broadened to shared use-cases when too small"""

        pool = self.store.list_tools_by_category(
            tool.primary_category_id,
            exclude_id=tool.id,
            limit=self.config.category_pool_limit,
        )

        if len(pool) < self.config.min_pool_size:
            logger.debug(
                "Broadening alternatives pool",
                slug=tool.slug,
                category_pool=len(pool),
                threshold=self.config.min_pool_size,
            )
            pool = self.store.list_tools_by_category_or_use_cases(
                tool.primary_category_id,
                [u.id for u in tool.use_cases],
                exclude_id=tool.id,
                limit=self.config.broad_pool_limit,
            )

        return pool

    def score_candidate(
        self,
        tool: ToolSnapshot,
        candidate: ToolSnapshot,
        curated: Optional[Tuple[float, Optional[str]]] = None,
    ) -> RankedAlternative:
        """Score one candidate against the source tool"""

        cfg = self.config
        source_use_cases = tool.use_case_slugs
        candidate_use_cases = candidate.use_case_slugs

        integrations_overlap = overlap_count(tool.integrations, candidate.integrations)

        score = (
            jaccard(source_use_cases, candidate_use_cases) * cfg.use_case_weight
            + jaccard(tool.target_audience, candidate.target_audience) * cfg.audience_weight
            + jaccard(tool.key_features, candidate.key_features) * cfg.features_weight
            + min(integrations_overlap, cfg.integrations_cap) * cfg.integrations_weight
        )

        if candidate.is_featured:
            score += cfg.featured_bonus

        note = None
        if curated is not None:
            manual_score, note = curated
            score += min(max(manual_score, cfg.curated_min_score), cfg.curated_max_score)
            score += cfg.curated_bonus

        return RankedAlternative(
            tool=candidate,
            score=round_score(score),
            use_case_overlap=overlap_count(source_use_cases, candidate_use_cases),
            integrations_overlap=integrations_overlap,
            curated=curated is not None,
            curated_note=note,
        )
