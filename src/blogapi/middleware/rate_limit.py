"""
Rate Limiting Middleware

FastAPI middleware gating API paths through the sliding window rate limiter.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

import structlog
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from blogapi.middleware.rate_limiter import RateLimitResult, SlidingWindowRateLimiter
from blogapi.monitoring.metrics import RATE_LIMIT_REJECTIONS

logger = structlog.get_logger()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for rate limiting.

    Requests under ``path_prefix`` are checked per client address before any
    handler runs. Throttled requests receive a 429 body with a retry hint;
    admitted ones carry ``X-RateLimit-*`` headers.
    """

    def __init__(
        self,
        app: Any,
        rate_limiter: SlidingWindowRateLimiter,
        path_prefix: str = "/api",
        trust_proxy_headers: bool = False,
    ) -> None:
        """
        Initialize rate limit middleware.

        Args:
            app: FastAPI application instance
            rate_limiter: Limiter shared by every request of this application
            path_prefix: Only paths starting with this prefix are limited
            trust_proxy_headers: Derive the client key from X-Forwarded-For/X-Real-IP
        """
        super().__init__(app)
        self.rate_limiter = rate_limiter
        self.path_prefix = path_prefix
        self.trust_proxy_headers = trust_proxy_headers

    def _is_limited_path(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix.rstrip("/") + "/")

    def _get_client_ip(self, request: Request) -> str:
        """
        Extract client IP from request.

        Proxy headers are only honoured when explicitly trusted.
        """
        if self.trust_proxy_headers:
            forwarded_for = request.headers.get("X-Forwarded-For")
            if forwarded_for:
                return forwarded_for.split(",")[0].strip()

            real_ip = request.headers.get("X-Real-IP")
            if real_ip:
                return real_ip.strip()

        if request.client:
            return request.client.host

        return "unknown"

    @staticmethod
    def _add_rate_limit_headers(response: Response, result: RateLimitResult) -> None:
        response.headers["X-RateLimit-Limit"] = str(result.limit)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        # Unix seconds; reset_at is on the limiter's monotonic clock
        response.headers["X-RateLimit-Reset"] = str(int(time.time()) + result.reset_in)
        if not result.allowed:
            response.headers["Retry-After"] = str(result.retry_after)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        """Process request through rate limiting middleware."""
        if not self._is_limited_path(request.url.path):
            return await call_next(request)

        client_ip = self._get_client_ip(request)
        result = self.rate_limiter.admit(client_ip)

        if not result.allowed:
            logger.warning(
                "Rate limit exceeded",
                client_ip=client_ip,
                path=request.url.path,
                retry_after=result.retry_after,
            )
            RATE_LIMIT_REJECTIONS.inc()

            response = JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "Too Many Requests",
                    "message": "Rate limit exceeded. Please try again later.",
                    "code": status.HTTP_429_TOO_MANY_REQUESTS,
                    "retryAfter": result.retry_after,
                },
            )
            self._add_rate_limit_headers(response, result)
            return response

        response = await call_next(request)
        self._add_rate_limit_headers(response, result)
        return response
