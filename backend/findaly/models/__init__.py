"""Database models"""

from .category import Category
from .use_case import UseCase
from .tool import Tool, ToolStatus, PricingModel, tool_use_cases
from .curated_alternative import CuratedAlternative

__all__ = [
    "Category",
    "UseCase",
    "Tool",
    "ToolStatus",
    "PricingModel",
    "tool_use_cases",
    "CuratedAlternative",
]
