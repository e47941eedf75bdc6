"""API routes"""

from fastapi import APIRouter
from .catalog import router as catalog_router
from .alternatives import router as alternatives_router
from .links import router as links_router
from .best import router as best_router

api_router = APIRouter()

api_router.include_router(catalog_router, tags=["catalog"])
api_router.include_router(alternatives_router, prefix="/alternatives", tags=["alternatives"])
api_router.include_router(links_router, prefix="/links", tags=["links"])
api_router.include_router(best_router, prefix="/best", tags=["best"])
