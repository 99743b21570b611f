"""
Request Logging

Per-request trace ids bound into structlog context, with one completion
log line per request.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response

logger = structlog.get_logger()

TRACE_HEADERS = ("X-Trace-ID", "X-Request-ID")


def _trace_id(request: Request) -> str:
    return request.headers.get("X-Request-ID") or str(uuid.uuid4())


async def logging_middleware(request: Request, call_next: Callable) -> Response:
    """
    Bind request context, time the request and log its outcome.

    Client errors are logged at info, server errors at warning. The trace id
    and duration are echoed in ``X-Trace-ID``, ``X-Request-ID`` and
    ``X-Response-Time``.
    """
    trace_id = _trace_id(request)

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        trace_id=trace_id,
        method=request.method,
        path=request.url.path,
        query=request.url.query or None,
        client_host=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )

    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.error(
            "Request failed",
            error=str(exc),
            error_type=type(exc).__name__,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            exc_info=True,
        )
        raise

    duration_ms = (time.perf_counter() - started) * 1000
    log = logger.warning if response.status_code >= 500 else logger.info
    log(
        "Request completed",
        status_code=response.status_code,
        content_length=response.headers.get("content-length"),
        duration_ms=round(duration_ms, 2),
    )

    for header in TRACE_HEADERS:
        response.headers[header] = trace_id
    response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
    return response
