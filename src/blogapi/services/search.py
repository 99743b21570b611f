"""
Free-text Search

Case-insensitive substring search across articles, comments and users.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from blogapi.exceptions import FieldError, ValidationError
from blogapi.models.blog import Article, Comment, SearchResponse, User
from blogapi.services.query import contains_text

MIN_QUERY_LENGTH = 2


class SearchType(str, Enum):
    """Searchable collection types."""

    ARTICLES = "articles"
    COMMENTS = "comments"
    USERS = "users"
    ALL = "all"


def _includes(search_type: str, target: SearchType) -> bool:
    return search_type in (target.value, SearchType.ALL.value)


def _article_matches(article: Article, needle: str) -> bool:
    return contains_text(needle, article.title, article.content) or any(
        needle in tag.lower() for tag in article.tags
    )


def _user_matches(user: User, needle: str) -> bool:
    return contains_text(needle, user.username, user.first_name, user.last_name, user.bio)


def search_collections(
    query: str | None,
    search_type: str,
    limit: int,
    articles: Sequence[Article],
    comments: Sequence[Comment],
    users: Sequence[User],
) -> SearchResponse:
    """
    Search the requested collection types.

    Raises:
        ValidationError: If the query is missing or shorter than two characters
    """
    if not query or len(query) < MIN_QUERY_LENGTH:
        raise ValidationError(
            "Search query must be at least 2 characters long",
            details=[FieldError("q", "Query must be at least 2 characters long")],
        )

    needle = query.lower()
    result = SearchResponse(query=query, total_results=0)

    if _includes(search_type, SearchType.ARTICLES):
        result.articles = [a for a in articles if _article_matches(a, needle)][:limit]
        result.total_results += len(result.articles)

    if _includes(search_type, SearchType.COMMENTS):
        result.comments = [c for c in comments if contains_text(needle, c.content)][:limit]
        result.total_results += len(result.comments)

    if _includes(search_type, SearchType.USERS):
        result.users = [u for u in users if _user_matches(u, needle)][:limit]
        result.total_results += len(result.users)

    return result
