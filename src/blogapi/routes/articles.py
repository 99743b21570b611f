"""
Article Endpoints

List, fetch and create blog articles, plus the article tag index.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Body, Depends, Query, status

from blogapi.auth.dependencies import require_auth
from blogapi.config import settings
from blogapi.dependencies import get_repository
from blogapi.docs.openapi_examples import ARTICLE_CREATE_EXAMPLES
from blogapi.models.blog import (
    Article,
    ArticleCreate,
    ArticleListResponse,
    ArticleTagsResponse,
    AuthorSummary,
)
from blogapi.models.errors import error_responses
from blogapi.monitoring.metrics import ARTICLE_VIEWS, RECORDS_CREATED
from blogapi.services.query import ArticleFilters, parse_bool, parse_positive_int
from blogapi.services.repository import BlogRepository

router = APIRouter(prefix="/api")
logger = structlog.get_logger()

Repository = Annotated[BlogRepository, Depends(get_repository)]


@router.get(
    "/articles",
    response_model=ArticleListResponse,
    summary="List articles",
    description="""
List articles matching every supplied filter, one page at a time.

- `author`: author id
- `tag`: exact tag
- `published`: `true` (default when omitted); any other value lists unpublished articles
- `search`: case-insensitive substring of title or content

Invalid `page`/`limit` values fall back to `1`/`10`. Pages past the end
return an empty list; `pagination.total` always counts every match.
    """,
    responses=error_responses(429),
)
async def list_articles(
    repository: Repository,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Articles per page")] = None,
    author: Annotated[str | None, Query(description="Author id")] = None,
    tag: Annotated[str | None, Query(description="Tag")] = None,
    published: Annotated[str | None, Query(description="Publication state")] = None,
    search: Annotated[str | None, Query(description="Free-text filter")] = None,
) -> ArticleListResponse:
    """List articles with filtering and pagination."""
    filters = ArticleFilters(
        author=author,
        tag=tag,
        published=parse_bool(published, default=True),
        search=search,
    )
    return repository.list_articles(
        filters,
        page=parse_positive_int(page, 1),
        limit=parse_positive_int(limit, settings.ARTICLES_PAGE_SIZE),
    )


@router.post(
    "/articles",
    response_model=Article,
    status_code=status.HTTP_201_CREATED,
    summary="Create article",
    responses=error_responses(400, 401, 429),
)
async def create_article(
    repository: Repository,
    user: Annotated[AuthorSummary, Depends(require_auth)],
    payload: Annotated[
        ArticleCreate | None, Body(openapi_examples=ARTICLE_CREATE_EXAMPLES)
    ] = None,
) -> Article:
    """Create an article authored by the authenticated user."""
    article = repository.create_article(payload or ArticleCreate(), author=user)
    RECORDS_CREATED.labels(collection="articles").inc()
    return article


@router.get(
    "/articles/{article_id}",
    response_model=Article,
    summary="Get article",
    description="Fetch a single article. Each successful fetch increments `viewCount`.",
    responses=error_responses(404, 429),
)
async def get_article(article_id: str, repository: Repository) -> Article:
    """Fetch an article by id."""
    article = repository.get_article(article_id)
    ARTICLE_VIEWS.inc()
    return article


@router.get(
    "/tags",
    response_model=ArticleTagsResponse,
    summary="Article tag index",
    description="Every tag used by at least one article, with the articles carrying it.",
    responses=error_responses(429),
)
async def article_tags(repository: Repository) -> ArticleTagsResponse:
    """Group articles by tag."""
    return repository.article_tags()
