"""Internal link schemas"""

from pydantic import BaseModel
from typing import Optional, List
from enum import Enum


class LinkKind(str, Enum):
    """Kind of page a link points at"""

    TOOL = "tool"
    CATEGORY = "category"
    ALTERNATIVES = "alternatives"
    COMPARE = "compare"
    BEST = "best"
    USE_CASE = "use-case"


class LinkItem(BaseModel):
    href: str
    label: str
    kind: LinkKind
    score: Optional[float] = None


class ToolLinks(BaseModel):
    """Links rendered on a tool page"""

    category: List[LinkItem] = []
    alternatives: List[LinkItem] = []
    comparisons: List[LinkItem] = []
    best: List[LinkItem] = []


class AlternativesLinks(BaseModel):
    """Links rendered on an alternatives page"""

    primary: List[LinkItem] = []
    top_alternatives: List[LinkItem] = []
    comparisons: List[LinkItem] = []


class CompareLinks(BaseModel):
    """Links rendered on a comparison page"""

    primary: List[LinkItem] = []
    categories: List[LinkItem] = []
    best: List[LinkItem] = []


class CategoryLinks(BaseModel):
    """Links rendered on a category hub"""

    best: List[LinkItem] = []
    use_cases: List[LinkItem] = []
    comparisons: List[LinkItem] = []
    alternatives: List[LinkItem] = []


class BestLinks(BaseModel):
    """Links rendered on a best-for page"""

    primary: List[LinkItem] = []
    tools: List[LinkItem] = []
    comparisons: List[LinkItem] = []
    alternatives: List[LinkItem] = []
