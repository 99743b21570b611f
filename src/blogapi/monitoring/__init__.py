"""
Monitoring for the blog API.

Prometheus metrics collected by the request middleware and exposed on /metrics.
"""

from blogapi.monitoring.metrics import (
    ACTIVE_REQUESTS,
    ARTICLE_VIEWS,
    RATE_LIMIT_REJECTIONS,
    RECORDS_CREATED,
    REQUEST_COUNT,
    REQUEST_DURATION,
)

__all__ = [
    "ACTIVE_REQUESTS",
    "ARTICLE_VIEWS",
    "RATE_LIMIT_REJECTIONS",
    "RECORDS_CREATED",
    "REQUEST_COUNT",
    "REQUEST_DURATION",
]
