"""
Metrics Middleware

Records request counts, latencies and in-flight requests in Prometheus.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from fastapi import Request, Response

from blogapi.monitoring.metrics import ACTIVE_REQUESTS, REQUEST_COUNT, REQUEST_DURATION


def _path_label(request: Request) -> str:
    # Route templates keep article ids out of the label set
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _observe(request: Request, status_code: int, elapsed: float) -> None:
    path = _path_label(request)
    REQUEST_COUNT.labels(method=request.method, path=path, status_code=status_code).inc()
    REQUEST_DURATION.labels(method=request.method, path=path).observe(elapsed)


async def metrics_middleware(request: Request, call_next: Callable) -> Response:
    """Count and time every request; failures are recorded as 500."""
    started = time.perf_counter()
    ACTIVE_REQUESTS.inc()
    try:
        response = await call_next(request)
    except Exception:
        _observe(request, 500, time.perf_counter() - started)
        raise
    finally:
        ACTIVE_REQUESTS.dec()

    _observe(request, response.status_code, time.perf_counter() - started)
    return response
