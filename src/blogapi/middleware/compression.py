"""
gzip Middleware

Compresses JSON, YAML and HTML bodies (article listings, the OpenAPI
document, the docs pages) for clients that accept gzip.
"""

from __future__ import annotations

import gzip
from collections.abc import Callable

from fastapi import Request, Response
from starlette.datastructures import MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware

OPT_OUT_HEADER = "x-no-compression"

COMPRESSIBLE_MEDIA_TYPES = frozenset(
    {
        "application/json",
        "application/yaml",
        "application/x-yaml",
        "application/javascript",
        "application/xml",
        "text/yaml",
        "text/html",
        "text/plain",
        "text/css",
        "text/javascript",
        "text/xml",
    }
)


def _media_type(response: Response) -> str:
    return response.headers.get("content-type", "").partition(";")[0].strip().lower()


class CompressionMiddleware(BaseHTTPMiddleware):
    """
    gzip response bodies of at least ``min_size`` bytes.

    A request carrying ``X-No-Compression`` is always answered uncompressed.
    Bodies that are already encoded, of a binary media type, or that would
    not shrink are passed through.
    """

    def __init__(self, app, min_size: int = 1024, compression_level: int = 6):
        """
        Args:
            app: ASGI application
            min_size: Threshold in bytes below which bodies are left alone
            compression_level: gzip level, 1 (fastest) to 9 (smallest)
        """
        super().__init__(app)
        self.min_size = min_size
        self.compression_level = compression_level

    def _accepts_gzip(self, request: Request) -> bool:
        if request.headers.get(OPT_OUT_HEADER):
            return False
        return "gzip" in request.headers.get("accept-encoding", "").lower()

    def _is_compressible(self, response: Response) -> bool:
        if "content-encoding" in response.headers:
            return False
        return _media_type(response) in COMPRESSIBLE_MEDIA_TYPES

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        if not (self._accepts_gzip(request) and self._is_compressible(response)):
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        # Raw list keeps repeated headers such as Set-Cookie
        headers = MutableHeaders(raw=list(response.raw_headers))

        if len(body) >= self.min_size:
            compressed = gzip.compress(body, compresslevel=self.compression_level)
            if len(compressed) < len(body):
                body = compressed
                headers["content-encoding"] = "gzip"
                headers["vary"] = "Accept-Encoding"

        headers["content-length"] = str(len(body))
        rebuilt = Response(content=body, status_code=response.status_code)
        rebuilt.raw_headers = headers.raw
        return rebuilt
