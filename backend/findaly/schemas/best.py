"""Best-for listing schemas"""

from pydantic import BaseModel
from typing import List

from .catalog import CategoryRef, UseCaseRef, ToolSnapshot


class BestListingEntry(BaseModel):
    tool: ToolSnapshot
    score: float
    rank: int


class ComparePair(BaseModel):
    left_slug: str
    left_name: str
    right_slug: str
    right_name: str
    href: str


class BestListing(BaseModel):
    """One page of the best tools for a (category, use-case) pair"""

    category: CategoryRef
    use_case: UseCaseRef
    title: str
    page: int
    total_pages: int
    total: int
    tools: List[BestListingEntry]
    compare_pairs: List[ComparePair]
