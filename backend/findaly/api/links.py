"""Internal link endpoints consumed by page templates"""

from fastapi import APIRouter, Depends, Query
from typing import Optional

from ..schemas.links import ToolLinks, AlternativesLinks, CompareLinks, CategoryLinks, BestLinks
from ..services.internal_links import InternalLinkingEngine
from ..services.cache import TTLCache
from ..utils.dependencies import get_linking_engine, get_link_cache
from ..utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

# Unresolvable identities return empty bundles with 200 so pages render without the sections


@router.get("/tool/{slug}", response_model=ToolLinks)
def tool_links(slug: str, engine: InternalLinkingEngine = Depends(get_linking_engine)):
    return engine.tool_links(slug)


@router.get("/alternatives/{slug}", response_model=AlternativesLinks)
def alternatives_links(slug: str, engine: InternalLinkingEngine = Depends(get_linking_engine)):
    return engine.alternatives_links(slug)


@router.get("/compare/{pair}", response_model=CompareLinks)
def compare_links(pair: str, engine: InternalLinkingEngine = Depends(get_linking_engine)):
    """Links for a comparison page; pair looks like acme-vs-beta"""
    return engine.compare_links(pair)


@router.get("/category/{slug}", response_model=CategoryLinks)
def category_links(slug: str, engine: InternalLinkingEngine = Depends(get_linking_engine)):
    return engine.category_links(slug)


@router.get("/best/{best_slug}", response_model=BestLinks)
def best_links(best_slug: str, engine: InternalLinkingEngine = Depends(get_linking_engine)):
    """Links for a best-for page; best_slug looks like crm-tools-for-startups"""
    return engine.best_links(best_slug)


@router.delete("/cache")
def clear_link_cache(
    namespace: Optional[str] = Query(None, description="e.g. tool-internal-links; all namespaces if omitted"),
    cache: TTLCache = Depends(get_link_cache),
):
    """Drop cached link bundles so catalog edits show up before the TTL elapses"""

    cleared = cache.clear(namespace)
    logger.info("Link cache cleared", namespace=namespace, cleared=cleared)

    return {"cleared": cleared, "namespace": namespace}
