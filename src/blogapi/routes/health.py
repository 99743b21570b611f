"""
Health Endpoints

Liveness, readiness and a detailed health report covering the repository
and the rate limiter.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, HTTPException, Request, status

from blogapi.config import settings
from blogapi.models.health import (
    ComponentHealth,
    HealthResponse,
    LivenessResponse,
    ReadinessResponse,
)

router = APIRouter()
logger = structlog.get_logger()

FEATURES = [
    "articles",
    "comments",
    "users",
    "analytics",
    "search",
    "custom-middleware",
    "rate-limiting",
    "compression",
]


def _uptime(request: Request) -> float:
    started = getattr(request.app.state, "started_at", None)
    return round(time.monotonic() - started, 3) if started is not None else 0.0


def _component_checks(request: Request) -> dict[str, ComponentHealth]:
    checks = {
        "application": ComponentHealth(status="healthy", details="Blog API application is running"),
    }

    repository = getattr(request.app.state, "repository", None)
    if repository is not None:
        counts = repository.counts()
        checks["repository"] = ComponentHealth(
            status="healthy",
            details=(
                f"{counts['totalArticles']} articles, {counts['totalComments']} comments, "
                f"{counts['totalUsers']} users"
            ),
        )

    rate_limiter = getattr(request.app.state, "rate_limiter", None)
    if rate_limiter is not None:
        checks["rate_limiter"] = ComponentHealth(
            status="healthy",
            details=f"{rate_limiter.tracked_clients} tracked clients",
        )
    return checks


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Service status, version, uptime, enabled features and component checks. Public.",
)
async def health_check(request: Request) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service=settings.SERVICE_NAME,
        version=settings.API_VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=datetime.now(UTC).isoformat(),
        uptime=_uptime(request),
        features=FEATURES,
        checks=_component_checks(request),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    responses={503: {"description": "Repository or OpenAPI document unavailable"}},
)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Ready once the repository is attached and the OpenAPI document builds."""
    checks = {
        "repository": getattr(request.app.state, "repository", None) is not None,
        "openapi": bool(request.app.openapi()),
    }
    if not all(checks.values()):
        logger.warning("Readiness check failed", checks=checks)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Service not ready")

    return ReadinessResponse(checks=checks)


@router.get("/live", response_model=LivenessResponse, summary="Liveness probe")
async def liveness_check() -> LivenessResponse:
    return LivenessResponse()
