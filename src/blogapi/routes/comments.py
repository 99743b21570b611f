"""
Comment Endpoints

List and add comments on articles.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status

from blogapi.auth.dependencies import get_optional_user
from blogapi.config import settings
from blogapi.dependencies import get_repository
from blogapi.docs.openapi_examples import COMMENT_CREATE_EXAMPLES
from blogapi.models.blog import AuthorSummary, Comment, CommentCreate, CommentListResponse
from blogapi.models.errors import error_responses
from blogapi.monitoring.metrics import RECORDS_CREATED
from blogapi.services.query import parse_positive_int
from blogapi.services.repository import BlogRepository

router = APIRouter(prefix="/api")

Repository = Annotated[BlogRepository, Depends(get_repository)]


@router.get(
    "/articles/{article_id}/comments",
    response_model=CommentListResponse,
    summary="List article comments",
    description="Paginated comments of an article (default 20 per page). Unknown articles have no comments.",
    responses=error_responses(429),
)
async def list_comments(
    article_id: str,
    repository: Repository,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Comments per page")] = None,
) -> CommentListResponse:
    return repository.list_comments(
        article_id,
        page=parse_positive_int(page, 1),
        limit=parse_positive_int(limit, settings.COMMENTS_PAGE_SIZE),
    )


@router.post(
    "/articles/{article_id}/comments",
    response_model=Comment,
    status_code=status.HTTP_201_CREATED,
    summary="Add comment",
    description="Add a comment and increment the article's `commentCount` when the article exists.",
    responses=error_responses(400, 429),
)
async def add_comment(
    article_id: str,
    repository: Repository,
    user: Annotated[AuthorSummary | None, Depends(get_optional_user)],
    payload: Annotated[
        CommentCreate | None, Body(openapi_examples=COMMENT_CREATE_EXAMPLES)
    ] = None,
) -> Comment:
    comment = repository.add_comment(article_id, payload or CommentCreate(), author=user)
    RECORDS_CREATED.labels(collection="comments").inc()
    return comment
