"""Best-for listing endpoint"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from typing import Optional

from ..schemas.best import BestListing
from ..services.best_list import BestListService
from ..utils.dependencies import get_best_list_service

router = APIRouter()


@router.get("/{best_slug}", response_model=BestListing)
def get_best_listing(
    best_slug: str,
    page: int = Query(1, ge=1),
    pricing: Optional[str] = Query(None, description="Comma-separated: free,freemium,paid,enterprise"),
    service: BestListService = Depends(get_best_list_service),
):
    """Top tools for "<category>-tools-for-<use-case>", scored for the use-case"""

    listing = service.list_best(best_slug, page=page, pricing=pricing)
    if listing is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No tools for this category and use-case"
        )

    return listing
