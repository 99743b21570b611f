"""
Security Headers

Helmet-style response headers. The header set is computed once from
settings and stamped onto every response.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from blogapi.config import BlogAPISettings, settings

STRIPPED_HEADERS = ("Server", "X-Powered-By")


def build_security_headers(config: BlogAPISettings) -> dict[str, str]:
    """
    Resolve the security header set for ``config``.

    Cross-Origin-Embedder-Policy is never emitted: the Swagger UI and ReDoc
    pages load their assets from a CDN.
    """
    headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": config.SECURITY_X_FRAME_OPTIONS,
        "X-DNS-Prefetch-Control": "off",
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
        "Referrer-Policy": config.SECURITY_REFERRER_POLICY,
    }
    if config.SECURITY_HSTS_ENABLED:
        headers["Strict-Transport-Security"] = (
            f"max-age={config.SECURITY_HSTS_MAX_AGE}; includeSubDomains"
        )
    if config.SECURITY_CSP_ENABLED:
        headers["Content-Security-Policy"] = config.SECURITY_CSP_POLICY
    if config.SECURITY_PERMISSIONS_POLICY:
        headers["Permissions-Policy"] = config.SECURITY_PERMISSIONS_POLICY
    headers.update(config.SECURITY_CUSTOM_HEADERS)
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp the security header set on every response and drop server banners."""

    def __init__(self, app, headers: Mapping[str, str] | None = None):
        super().__init__(app)
        self.headers = dict(build_security_headers(settings) if headers is None else headers)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for name in STRIPPED_HEADERS:
            if name in response.headers:
                del response.headers[name]
        response.headers.update(self.headers)
        return response
