"""Ranked alternatives endpoint"""

from fastapi import APIRouter, Depends, HTTPException, status

from ..schemas.alternatives import AlternativesResult
from ..services.alternatives import AlternativesService
from ..utils.dependencies import get_alternatives_service

router = APIRouter()


@router.get("/{slug}", response_model=AlternativesResult)
def get_alternatives(slug: str, service: AlternativesService = Depends(get_alternatives_service)):
    """
    Get ranked alternatives for a tool

    Candidates come from curated edges, the tool's category and, for thin
    categories, tools sharing a use-case. At most 12 are returned, best first.
    """

    result = service.rank_alternatives(slug)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Tool not found"
        )

    return result
