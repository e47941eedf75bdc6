"""Ranked alternatives schemas"""

from pydantic import BaseModel
from typing import Optional, List

from .catalog import ToolSnapshot


class RankedAlternative(BaseModel):
    """A candidate tool with its similarity score and raw signals"""

    tool: ToolSnapshot
    score: float
    use_case_overlap: int
    integrations_overlap: int
    curated: bool = False
    curated_note: Optional[str] = None


class AlternativesResult(BaseModel):
    """Source tool plus its ranked alternatives"""

    tool: ToolSnapshot
    alternatives: List[RankedAlternative]
