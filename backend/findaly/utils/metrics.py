"""Prometheus metrics configuration"""

from prometheus_client import Counter, Histogram, Info
from prometheus_fastapi_instrumentator import Instrumentator
from typing import Callable
import time
from functools import wraps

# Application info
app_info = Info('findaly_decision_engine', 'Findaly Decision Engine Information')
app_info.info({
    'version': '1.0.0',
    'service': 'findaly-decision-engine'
})

# Ranking metrics
ranking_duration_seconds = Histogram(
    'ranking_duration_seconds',
    'Time taken to rank alternatives',
    ['ranker']
)

alternatives_ranked_total = Counter(
    'alternatives_ranked_total',
    'Total alternatives returned by the ranker'
)

# Link assembly metrics
link_bundles_built_total = Counter(
    'link_bundles_built_total',
    'Internal link bundles computed (cache misses included)',
    ['page_kind', 'resolved']
)

# Cache metrics
cache_hits_total = Counter(
    'cache_hits_total',
    'Total cache hits',
    ['namespace']
)

cache_misses_total = Counter(
    'cache_misses_total',
    'Total cache misses',
    ['namespace']
)

cache_errors_total = Counter(
    'cache_errors_total',
    'Cache backend errors',
    ['namespace']
)


def setup_metrics(app):
    """
    Setup Prometheus metrics for FastAPI app

    Args:
        app: FastAPI application instance
    """
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics"],
        env_var_name="ENABLE_METRICS",
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True
    )

    instrumentator.instrument(app).expose(app, endpoint="/metrics")

    return instrumentator


def track_ranking_time(ranker: str):
    """
    Decorator to track ranking time

    Usage:
        @track_ranking_time("alternatives")
        def rank():
            pass
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                ranking_duration_seconds.labels(ranker=ranker).observe(time.time() - start_time)

        return wrapper

    return decorator


def record_alternatives_ranked(count: int):
    alternatives_ranked_total.inc(count)


def record_link_bundle(page_kind: str, resolved: bool):
    link_bundles_built_total.labels(page_kind=page_kind, resolved=str(resolved).lower()).inc()


def increment_cache_hit(namespace: str):
    """Increment cache hit counter"""
    cache_hits_total.labels(namespace=namespace).inc()


def increment_cache_miss(namespace: str):
    """Increment cache miss counter"""
    cache_misses_total.labels(namespace=namespace).inc()


def increment_cache_error(namespace: str):
    cache_errors_total.labels(namespace=namespace).inc()
