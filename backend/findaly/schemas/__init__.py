"""Pydantic schemas for request/response validation"""

from .catalog import (
    CategoryRef,
    UseCaseRef,
    ToolSnapshot,
    CuratedEdge,
    CategoryCreate,
    UseCaseCreate,
    ToolCreate,
    ToolUpdate,
    CuratedAlternativeCreate,
    CuratedAlternativeResponse,
)
from .alternatives import RankedAlternative, AlternativesResult
from .links import LinkKind, LinkItem, ToolLinks, AlternativesLinks, CompareLinks, CategoryLinks, BestLinks
from .best import BestListing, BestListingEntry, ComparePair

__all__ = [
    "CategoryRef",
    "UseCaseRef",
    "ToolSnapshot",
    "CuratedEdge",
    "CategoryCreate",
    "UseCaseCreate",
    "ToolCreate",
    "ToolUpdate",
    "CuratedAlternativeCreate",
    "CuratedAlternativeResponse",
    "RankedAlternative",
    "AlternativesResult",
    "LinkKind",
    "LinkItem",
    "ToolLinks",
    "AlternativesLinks",
    "CompareLinks",
    "CategoryLinks",
    "BestLinks",
    "BestListing",
    "BestListingEntry",
    "ComparePair",
]
