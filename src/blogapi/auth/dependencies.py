"""
FastAPI Authentication Dependencies

Stub bearer authentication for protecting blog routes.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from blogapi.models.blog import AuthorSummary

logger = structlog.get_logger()

MIN_TOKEN_LENGTH = 10

DEMO_USER = AuthorSummary(
    id="123e4567-e89b-12d3-a456-426614174000",
    username="demo_user",
    role="writer",
)

# HTTP Bearer token scheme
bearer_scheme = HTTPBearer(auto_error=False, scheme_name="BearerAuth")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_auth(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthorSummary:
    """
    Require a bearer token and resolve the demo user.

    Raises:
        HTTPException: If the header is missing or the token is too short
    """
    if not credentials:
        raise _unauthorized("Missing or invalid authorization header")

    if len(credentials.credentials) < MIN_TOKEN_LENGTH:
        logger.warning("Token validation failed", reason="token too short")
        raise _unauthorized("Invalid token")

    return DEMO_USER.model_copy()


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthorSummary | None:
    """Resolve the demo user when a usable bearer token is present."""
    if credentials and len(credentials.credentials) >= MIN_TOKEN_LENGTH:
        return DEMO_USER.model_copy()
    return None
