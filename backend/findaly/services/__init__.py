"""Ranking and linking services"""

from .catalog import CatalogStore, SqlCatalogStore, InMemoryCatalogStore
from .alternatives import AlternativesService
from .internal_links import InternalLinkingEngine
from .best_list import BestListService
from .cache import TTLCache, MemoryTTLCache, RedisTTLCache

__all__ = [
    "CatalogStore",
    "SqlCatalogStore",
    "InMemoryCatalogStore",
    "AlternativesService",
    "InternalLinkingEngine",
    "BestListService",
    "TTLCache",
    "MemoryTTLCache",
    "RedisTTLCache",
]
