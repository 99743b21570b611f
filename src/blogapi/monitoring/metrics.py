"""
Prometheus Metrics Collection

Metrics for blog API monitoring:
- HTTP request/response metrics
- Rate limiting rejections
- Blog collection activity
"""

from __future__ import annotations

from typing import Any

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

_metrics_cache: dict[str, Any] = {}


def _find_registered(name: str, registry: CollectorRegistry) -> Any:
    # Counters are stored without their "_total" suffix
    base_name = name.removesuffix("_total")
    for collector in list(registry._collector_to_names.keys()):
        if getattr(collector, "_name", None) in (name, base_name):
            return collector
    return None


def _get_or_create(factory: type, name: str, documentation: str, **kwargs: Any) -> Any:
    """Get existing metric or create a new one, tolerating re-imports."""
    if name in _metrics_cache:
        return _metrics_cache[name]

    try:
        metric = factory(name, documentation, registry=REGISTRY, **kwargs)
    except ValueError:
        # Already registered by an earlier import of this module
        metric = _find_registered(name, REGISTRY)
        if metric is None:
            raise
    _metrics_cache[name] = metric
    return metric


REQUEST_COUNT: Counter = _get_or_create(
    Counter,
    "blogapi_requests_total",
    "Total HTTP requests",
    labelnames=["method", "path", "status_code"],
)

REQUEST_DURATION: Histogram = _get_or_create(
    Histogram,
    "blogapi_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=["method", "path"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

ACTIVE_REQUESTS: Gauge = _get_or_create(
    Gauge,
    "blogapi_active_requests",
    "Requests currently being processed",
)

RATE_LIMIT_REJECTIONS: Counter = _get_or_create(
    Counter,
    "blogapi_rate_limit_rejections_total",
    "Requests rejected by the rate limiter",
)

ARTICLE_VIEWS: Counter = _get_or_create(
    Counter,
    "blogapi_article_views_total",
    "Single-article fetches",
)

RECORDS_CREATED: Counter = _get_or_create(
    Counter,
    "blogapi_records_created_total",
    "Records created through the API",
    labelnames=["collection"],
)
