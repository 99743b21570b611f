"""
Error Handlers

Render domain errors, HTTP errors and unexpected failures into the JSON
error body ``{error, message, code[, details][, availableEndpoints]}``.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.routing import Route

from blogapi.exceptions import BlogAPIError, ValidationError

logger = structlog.get_logger()


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def error_body(status_code: int, message: str, **extra: Any) -> dict[str, Any]:
    """Build the shared error payload."""
    body: dict[str, Any] = {
        "error": _phrase(status_code),
        "message": message,
        "code": status_code,
    }
    body.update({key: value for key, value in extra.items() if value is not None})
    return body


def available_endpoints(app: FastAPI) -> list[str]:
    """List ``METHOD /path`` for every registered route, in registration order."""
    endpoints: list[str] = []
    for route in app.routes:
        if not isinstance(route, Route) or route.path.endswith("oauth2-redirect"):
            continue
        for method in sorted(route.methods or ()):
            if method != "HEAD":
                endpoints.append(f"{method} {route.path}")
    return endpoints


async def blog_api_error_handler(request: Request, exc: BlogAPIError) -> JSONResponse:
    """Render a domain error."""
    details = None
    if isinstance(exc, ValidationError) and exc.details:
        details = [{"field": d.field, "message": d.message} for d in exc.details]

    logger.info(
        "Request rejected",
        error=exc.error,
        message=exc.message,
        code=exc.code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            **error_body(exc.status_code, exc.message, details=details),
            "error": exc.error,
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors; unknown routes list the available endpoints."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(
                exc.status_code,
                f"Route {request.method} {request.url.path} not found",
                availableEndpoints=available_endpoints(request.app),
            ),
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies as 400 validation errors."""
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            **error_body(status.HTTP_400_BAD_REQUEST, "Invalid request", details=details),
            "error": ValidationError.error,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unexpected failures as 500 without leaking internals."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every error handler to ``app``."""
    app.add_exception_handler(BlogAPIError, blog_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
