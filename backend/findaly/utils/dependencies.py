"""Service dependencies for FastAPI routes"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from .database import get_db
from ..config import settings
from ..services.catalog import CatalogStore, SqlCatalogStore
from ..services.alternatives import AlternativesService
from ..services.internal_links import InternalLinkingEngine
from ..services.best_list import BestListService
from ..services.cache import TTLCache, MemoryTTLCache, RedisTTLCache


def get_catalog_store(db: Session = Depends(get_db)) -> CatalogStore:
    """Catalog store bound to the request's database session"""
    return SqlCatalogStore(db)


@lru_cache(maxsize=1)
def get_link_cache() -> TTLCache:
    """
    Process-wide link cache

    CACHE_BACKEND=redis shares entries between workers; the default memory
    backend keeps them per process.
    """
    if settings.CACHE_BACKEND == "redis":
        return RedisTTLCache(ttl=settings.LINK_CACHE_TTL)
    return MemoryTTLCache(ttl=settings.LINK_CACHE_TTL)


def get_alternatives_service(store: CatalogStore = Depends(get_catalog_store)) -> AlternativesService:
    return AlternativesService(store, settings.ranking_config())


def get_linking_engine(
    store: CatalogStore = Depends(get_catalog_store),
    alternatives: AlternativesService = Depends(get_alternatives_service),
    cache: TTLCache = Depends(get_link_cache),
) -> InternalLinkingEngine:
    return InternalLinkingEngine(store, alternatives, settings.linking_limits(), cache)


def get_best_list_service(store: CatalogStore = Depends(get_catalog_store)) -> BestListService:
    return BestListService(store)
