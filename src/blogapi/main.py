"""
Blog API - FastAPI Application

Main application entry point for the blog API documentation server.
Serves the mock blog API, its OpenAPI document and interactive docs.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from blogapi.config import settings
from blogapi.docs.spec import install_openapi
from blogapi.errors import register_exception_handlers
from blogapi.middleware.compression import CompressionMiddleware
from blogapi.middleware.cors import setup_cors
from blogapi.middleware.logging import logging_middleware
from blogapi.middleware.metrics import metrics_middleware
from blogapi.middleware.rate_limit import RateLimitMiddleware
from blogapi.middleware.rate_limiter import RateLimitPolicy, SlidingWindowRateLimiter
from blogapi.middleware.security_headers import SecurityHeadersMiddleware
from blogapi.routes import analytics, articles, comments, docs, health, users
from blogapi.services.demo_data import create_demo_repository
from blogapi.services.repository import BlogRepository


def configure_logging(level: str) -> None:
    """Filter structlog output below ``level``."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    configure_logging(settings.LOG_LEVEL)
    logger = structlog.get_logger()

    try:
        logger.info(
            "Starting blog API server",
            version=settings.API_VERSION,
            environment=settings.ENVIRONMENT,
            port=settings.PORT,
            docs=settings.DOCS_URL,
            spec_json=settings.SPEC_JSON_PATH,
            spec_yaml=settings.SPEC_YAML_PATH,
        )
        yield
    finally:
        logger.info("Shutting down blog API server")

        if hasattr(app.state, "rate_limiter"):
            removed = app.state.rate_limiter.compact()
            logger.info("Rate limiter compacted", removed=removed)


def _setup_rate_limiting(app: FastAPI, rate_limiter: SlidingWindowRateLimiter | None) -> None:
    """Setup rate limiting middleware for API paths."""
    if not settings.RATE_LIMIT_ENABLED:
        return

    if rate_limiter is None:
        rate_limiter = SlidingWindowRateLimiter(
            RateLimitPolicy(
                limit=settings.RATE_LIMIT_MAX_REQUESTS,
                window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
                cleanup_interval=settings.RATE_LIMIT_CLEANUP_INTERVAL,
            )
        )

    app.state.rate_limiter = rate_limiter
    app.add_middleware(
        RateLimitMiddleware,
        rate_limiter=rate_limiter,
        path_prefix=settings.RATE_LIMIT_PATH_PREFIX,
        trust_proxy_headers=settings.RATE_LIMIT_TRUST_PROXY_HEADERS,
    )


def create_app(
    repository: BlogRepository | None = None,
    rate_limiter: SlidingWindowRateLimiter | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        repository: Blog repository to serve (demo-seeded or empty by default)
        rate_limiter: Rate limiter for API paths (built from settings by default)
    """
    app = FastAPI(
        title=settings.API_TITLE,
        description="Example blog API served alongside its OpenAPI documentation",
        version=settings.API_VERSION,
        docs_url=settings.DOCS_URL,
        redoc_url=settings.REDOC_URL,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if repository is None:
        repository = create_demo_repository() if settings.SEED_DEMO_DATA else BlogRepository()
    app.state.repository = repository
    app.state.started_at = time.monotonic()

    # Innermost first: rate limiting runs after logging, CORS, compression
    # and security headers have wrapped the request.
    _setup_rate_limiting(app, rate_limiter)

    @app.middleware("http")
    async def add_logging_middleware(request, call_next):
        return await logging_middleware(request, call_next)

    if settings.ENABLE_METRICS:
        @app.middleware("http")
        async def add_metrics_middleware(request, call_next):
            return await metrics_middleware(request, call_next)

    setup_cors(app)

    if settings.COMPRESSION_ENABLED:
        app.add_middleware(
            CompressionMiddleware,
            min_size=settings.COMPRESSION_MIN_SIZE,
            compression_level=settings.COMPRESSION_LEVEL,
        )

    if settings.SECURITY_HEADERS_ENABLED:
        app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    # Include routers
    app.include_router(articles.router, tags=["articles"])
    app.include_router(comments.router, tags=["comments"])
    app.include_router(users.router, tags=["users"])
    app.include_router(analytics.router)
    app.include_router(docs.router, tags=["documentation"])
    app.include_router(health.router, tags=["health"])

    if settings.ENABLE_METRICS:
        @app.get("/metrics", include_in_schema=False)
        async def metrics() -> Response:
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    install_openapi(app, server_url=settings.SERVER_URL, spec_path=settings.SPEC_PATH)

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "blogapi.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )
