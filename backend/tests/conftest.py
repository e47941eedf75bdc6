"""Shared fixtures: an in-memory catalog builder"""

import itertools
from datetime import datetime
from typing import Iterable, Optional

import pytest

from findaly.schemas.catalog import CategoryRef, UseCaseRef, ToolSnapshot
from findaly.services.catalog import InMemoryCatalogStore
from findaly.services.link_rules import title_from_slug


class CatalogBuilder:
    """Builds tools, categories and curated edges into an InMemoryCatalogStore"""

    def __init__(self, store: Optional[InMemoryCatalogStore] = None):
        self.store = store or InMemoryCatalogStore()
        self._ids = itertools.count(1)

    def category(self, slug: str, name: Optional[str] = None) -> CategoryRef:
        if slug not in self.store.categories:
            self.store.add_category(
                CategoryRef(id=next(self._ids), slug=slug, name=name or title_from_slug(slug))
            )
        return self.store.categories[slug]

    def use_case(self, slug: str, name: Optional[str] = None) -> UseCaseRef:
        if slug not in self.store.use_cases:
            self.store.add_use_case(
                UseCaseRef(id=next(self._ids), slug=slug, name=name or title_from_slug(slug))
            )
        return self.store.use_cases[slug]

    def tool(
        self,
        slug: str,
        category: str = "crm",
        use_cases: Iterable[str] = (),
        status: str = "ACTIVE",
        featured: bool = False,
        audience: Iterable[str] = (),
        features: Iterable[str] = (),
        integrations: Iterable[str] = (),
        pricing: str = "FREEMIUM",
        name: Optional[str] = None,
    ) -> ToolSnapshot:
        cat = self.category(category)
        return self.store.add_tool(
            ToolSnapshot(
                id=next(self._ids),
                name=name or title_from_slug(slug),
                slug=slug,
                status=status,
                is_featured=featured,
                pricing_model=pricing,
                target_audience=list(audience),
                key_features=list(features),
                integrations=list(integrations),
                primary_category_id=cat.id,
                primary_category=cat,
                use_cases=[self.use_case(u) for u in use_cases],
            )
        )

    def curate(
        self,
        tool_slug: str,
        alternative_slug: str,
        score: float = 0.0,
        note: Optional[str] = None,
        updated_at: Optional[datetime] = None,
    ):
        return self.store.add_curated_edge(tool_slug, alternative_slug, score, note, updated_at)


@pytest.fixture
def catalog():
    """Empty catalog builder backed by InMemoryCatalogStore"""
    return CatalogBuilder()
