"""
User Endpoints

Profile of the authenticated user.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends

from blogapi.auth.dependencies import require_auth
from blogapi.dependencies import get_repository
from blogapi.docs.openapi_examples import PROFILE_UPDATE_EXAMPLE
from blogapi.models.blog import AuthorSummary, ProfileUpdate, User
from blogapi.models.errors import error_responses
from blogapi.services.repository import BlogRepository

router = APIRouter(prefix="/api/users")

Repository = Annotated[BlogRepository, Depends(get_repository)]


@router.get(
    "/profile",
    response_model=User,
    summary="Get profile",
    responses=error_responses(401, 404, 429),
)
async def get_profile(
    repository: Repository,
    _user: Annotated[AuthorSummary, Depends(require_auth)],
) -> User:
    return repository.get_profile()


@router.put(
    "/profile",
    response_model=User,
    summary="Update profile",
    description="Update `firstName`, `lastName`, `bio` and `avatar`. Empty values are ignored.",
    responses=error_responses(400, 401, 404, 429),
)
async def update_profile(
    repository: Repository,
    _user: Annotated[AuthorSummary, Depends(require_auth)],
    payload: Annotated[ProfileUpdate | None, Body(examples=[PROFILE_UPDATE_EXAMPLE])] = None,
) -> User:
    return repository.update_profile(payload or ProfileUpdate())
