"""
Health Models

Responses of the /health, /ready and /live probes.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

ComponentStatus = Literal["healthy", "degraded", "unhealthy"]


class ComponentHealth(BaseModel):
    """State of one server component (application, repository, rate limiter)."""

    status: ComponentStatus
    details: str = Field(..., description="Human-readable component summary")


class HealthResponse(BaseModel):
    """Service status with uptime, enabled features and component checks."""

    status: ComponentStatus
    service: str = Field(..., description="Service identifier")
    version: str = Field(..., description="API version")
    environment: str = Field(..., description="Deployment environment")
    timestamp: str = Field(..., description="ISO 8601 time of the check")
    uptime: float = Field(..., ge=0, description="Seconds since the application was created")
    features: list[str] = Field(default_factory=list, description="Enabled server features")
    checks: dict[str, ComponentHealth] = Field(default_factory=dict)

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "healthy",
                "service": "custom-blog-api",
                "version": "1.0.0",
                "environment": "development",
                "timestamp": "2024-05-01T12:00:00+00:00",
                "uptime": 42.5,
                "features": ["articles", "comments", "rate-limiting"],
                "checks": {
                    "repository": {
                        "status": "healthy",
                        "details": "1 articles, 1 comments, 1 users",
                    }
                },
            }
        }
    }


class ReadinessResponse(BaseModel):
    """Readiness probe result."""

    status: Literal["ready"] = "ready"
    ready: bool = True
    checks: dict[str, bool] = Field(..., description="Readiness condition results")


class LivenessResponse(BaseModel):
    """Liveness probe result."""

    status: Literal["alive"] = "alive"
