"""
Analytics and Search Endpoints

Aggregate statistics and cross-collection search.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from blogapi.auth.dependencies import require_auth
from blogapi.config import settings
from blogapi.dependencies import get_repository
from blogapi.models.blog import AnalyticsResponse, AuthorSummary, SearchResponse
from blogapi.models.errors import error_responses
from blogapi.services.query import parse_positive_int
from blogapi.services.repository import BlogRepository
from blogapi.services.search import SearchType

router = APIRouter(prefix="/api")

Repository = Annotated[BlogRepository, Depends(get_repository)]


@router.get(
    "/analytics",
    response_model=AnalyticsResponse,
    tags=["analytics"],
    summary="Blog analytics",
    description="""
Totals, the five most viewed articles and per-article engagement averages.
Averages are `0` when there are no articles.
    """,
    responses=error_responses(401, 429),
)
async def get_analytics(
    repository: Repository,
    _user: Annotated[AuthorSummary, Depends(require_auth)],
    period: Annotated[str, Query(description="Reporting period label")] = "month",
) -> AnalyticsResponse:
    return repository.analytics(period)


@router.get(
    "/search",
    response_model=SearchResponse,
    tags=["search"],
    summary="Search content",
    description="""
Case-insensitive substring search.

- `articles`: title, content, tags
- `comments`: content
- `users`: username, first name, last name, bio

Only the requested types appear in the response. `q` must be at least two
characters long.
    """,
    responses=error_responses(400, 429),
)
async def search_content(
    repository: Repository,
    q: Annotated[str | None, Query(description="Search query (min 2 characters)")] = None,
    search_type: Annotated[
        str, Query(alias="type", description="articles, comments, users or all")
    ] = SearchType.ALL.value,
    limit: Annotated[str | None, Query(description="Maximum results per type")] = None,
) -> JSONResponse:
    result = repository.search(
        q, search_type, parse_positive_int(limit, settings.SEARCH_RESULT_LIMIT)
    )
    return JSONResponse(content=result.to_payload())
