"""
Findaly Decision Engine - Main FastAPI Application

Ranking and internal-linking backend for the Findaly tool directory:
- Ranked alternatives per tool (curated edges + set-overlap scoring)
- Internal link bundles for tool, alternatives, compare, category and best pages
- Best-for listings per category and use-case
- Catalog administration (tools, categories, use-cases, curated alternatives)
- TTL caching (memory or Redis)
- Rate Limiting
- Structured Logging
- Prometheus Metrics
"""

from fastapi import FastAPI, status, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from .config import settings
from .api import api_router
from .utils.database import init_db, SessionLocal
from .utils.dependencies import get_link_cache
from .services.cache import RedisTTLCache
from .utils.logging import setup_logging, get_logger, configure_uvicorn_logging
from .utils.metrics import setup_metrics
from .utils.rate_limit import limiter

# Setup structured logging
setup_logging(log_level=settings.LOG_LEVEL)
configure_uvicorn_logging()
logger = get_logger(__name__)


def _cache_healthy() -> bool:
    cache = get_link_cache()
    if isinstance(cache, RedisTTLCache):
        return cache.health_check()
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""

    # Startup
    logger.info("Starting Findaly Decision Engine", version=settings.VERSION)

    logger.info("Initializing database")
    init_db()

    logger.info("Checking link cache", backend=settings.CACHE_BACKEND)
    if _cache_healthy():
        logger.info("Link cache available")
    else:
        logger.warning("Link cache unavailable - links will be computed on every request")

    logger.info("Findaly Decision Engine started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Findaly Decision Engine")


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    # Findaly Decision Engine API

    Similarity ranking and internal linking for the Findaly tool directory.

    ## Alternatives

    Candidates come from curated alternatives, the tool's category and, when
    the category is thin, tools sharing a use-case. Scores combine use-case,
    audience and feature overlap (Jaccard), shared integrations and curated
    or featured bonuses.

    ## Internal links

    - `/links/tool/{slug}`
    - `/links/alternatives/{slug}`
    - `/links/compare/{a}-vs-{b}`
    - `/links/category/{slug}`
    - `/links/best/{category}-tools-for-{use-case}`

    Unknown identities return empty bundles. Bundles are cached for
    `LINK_CACHE_TTL` seconds.
    """,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "catalog", "description": "Tools, categories, use-cases and curated alternatives"},
        {"name": "alternatives", "description": "Ranked alternatives for a tool"},
        {"name": "links", "description": "Internal link bundles per page kind"},
        {"name": "best", "description": "Best tools for a category and use-case"},
    ]
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Setup Prometheus metrics
setup_metrics(app)

# Include routers
app.include_router(api_router, prefix=settings.API_V1_STR)


# Middleware for logging requests
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests"""
    logger.info(
        "Request received",
        method=request.method,
        url=str(request.url),
        client=request.client.host if request.client else None
    )

    response = await call_next(request)

    logger.info(
        "Request completed",
        method=request.method,
        url=str(request.url),
        status_code=response.status_code
    )

    return response


@app.get("/", tags=["root"])
def root():
    """Root endpoint"""
    return {
        "message": "Findaly Decision Engine API",
        "version": settings.VERSION,
        "docs": "/docs",
        "status": "operational"
    }


@app.get("/health", tags=["root"], status_code=status.HTTP_200_OK)
def health_check():
    """Health check endpoint"""

    cache_healthy = _cache_healthy()

    db_healthy = True
    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        db_healthy = False

    overall_healthy = cache_healthy and db_healthy

    return {
        "status": "healthy" if overall_healthy else "degraded",
        "cache": settings.CACHE_BACKEND if cache_healthy else "disconnected",
        "database": "connected" if db_healthy else "disconnected",
        "version": settings.VERSION
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "findaly.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
