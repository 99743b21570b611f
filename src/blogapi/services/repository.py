"""
Blog Repository

In-memory repository owning the article, comment and user collections.

The repository is the single owner of mutable blog state. Every operation
runs under one lock, so view-count increments, appends and profile updates
are atomic with respect to concurrent readers, and callers always receive
snapshots rather than live records.
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TypeVar

import structlog
from pydantic import BaseModel

from blogapi.exceptions import FieldError, NotFoundError, ValidationError
from blogapi.models.blog import (
    AnalyticsResponse,
    Article,
    ArticleCreate,
    ArticleListResponse,
    ArticleReference,
    ArticleTag,
    ArticleTagsResponse,
    AuthorSummary,
    Comment,
    CommentCreate,
    CommentListResponse,
    ProfileUpdate,
    SearchResponse,
    User,
)
from blogapi.services.analytics import build_tag_index, compute_analytics
from blogapi.services.query import ArticleFilters, make_excerpt, paginate, slugify
from blogapi.services.search import search_collections

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]


def uuid_id_factory() -> str:
    """Default identifier generator."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(UTC)


def _snapshot(records: list[M]) -> list[M]:
    return [record.model_copy(deep=True) for record in records]


class BlogRepository:
    """
    In-memory blog store.

    Collections preserve insertion order. Identifiers and timestamps come from
    the injected ``id_factory`` and ``clock`` so tests can make them
    deterministic.
    """

    def __init__(
        self,
        articles: list[Article] | None = None,
        comments: list[Comment] | None = None,
        users: list[User] | None = None,
        id_factory: IdFactory = uuid_id_factory,
        clock: Clock = utc_now,
    ) -> None:
        self._articles: list[Article] = list(articles or [])
        self._comments: list[Comment] = list(comments or [])
        self._users: list[User] = list(users or [])
        self._id_factory = id_factory
        self._clock = clock
        self._lock = threading.Lock()

    # Articles

    def list_articles(
        self,
        filters: ArticleFilters,
        page: int,
        limit: int,
    ) -> ArticleListResponse:
        """List articles matching ``filters``, one page at a time."""
        with self._lock:
            matched = filters.apply(self._articles)
            page_items, pagination = paginate(matched, page, limit)
            return ArticleListResponse(articles=_snapshot(page_items), pagination=pagination)

    def get_article(self, article_id: str) -> Article:
        """
        Fetch an article and count the view.

        Raises:
            NotFoundError: If no article has this identifier
        """
        with self._lock:
            article = self._find_article(article_id)
            if article is None:
                raise NotFoundError("Article not found")
            article.view_count += 1
            return article.model_copy(deep=True)

    def create_article(self, payload: ArticleCreate, author: AuthorSummary | None) -> Article:
        """
        Create and store a new article.

        Raises:
            ValidationError: If title or content is missing
        """
        details: list[FieldError] = []
        if not payload.title:
            details.append(FieldError("title", "Title is required"))
        if not payload.content:
            details.append(FieldError("content", "Content is required"))
        if details:
            raise ValidationError("Title and content are required", details=details)

        now = self._clock()
        published = bool(payload.published)
        article = Article(
            id=self._id_factory(),
            title=payload.title,
            slug=slugify(payload.title),
            content=payload.content,
            excerpt=make_excerpt(payload.content, payload.excerpt),
            author=author,
            tags=list(payload.tags or []),
            published=published,
            published_at=now if published else None,
            created_at=now,
            updated_at=now,
        )

        with self._lock:
            self._articles.append(article)
            snapshot = article.model_copy(deep=True)

        logger.info("Article created", article_id=article.id, slug=article.slug)
        return snapshot

    def article_tags(self) -> ArticleTagsResponse:
        """Index articles by tag."""
        with self._lock:
            index = build_tag_index(self._articles, lambda article: article.tags)
            return ArticleTagsResponse(
                tags=[
                    ArticleTag(
                        name=tag,
                        article_count=len(tagged),
                        articles=[
                            ArticleReference(id=a.id, title=a.title, slug=a.slug)
                            for a in tagged
                        ],
                    )
                    for tag, tagged in index.items()
                ]
            )

    # Comments

    def list_comments(self, article_id: str, page: int, limit: int) -> CommentListResponse:
        """List comments for an article. Unknown articles yield an empty listing."""
        with self._lock:
            matched = [c for c in self._comments if c.article_id == article_id]
            page_items, pagination = paginate(matched, page, limit)
            return CommentListResponse(comments=_snapshot(page_items), pagination=pagination)

    def add_comment(
        self,
        article_id: str,
        payload: CommentCreate,
        author: AuthorSummary | None,
    ) -> Comment:
        """
        Add a comment and bump the article's comment count when it exists.

        The article reference is not enforced.

        Raises:
            ValidationError: If content is missing
        """
        if not payload.content:
            raise ValidationError(
                "Comment content is required",
                details=[FieldError("content", "Content is required")],
            )

        now = self._clock()
        comment = Comment(
            id=self._id_factory(),
            content=payload.content,
            author=author,
            article_id=article_id,
            parent_id=payload.parent_id or None,
            created_at=now,
            updated_at=now,
        )

        with self._lock:
            self._comments.append(comment)
            article = self._find_article(article_id)
            if article is not None:
                article.comment_count += 1
            else:
                logger.warning("Comment added to unknown article", article_id=article_id)
            return comment.model_copy(deep=True)

    # Users

    def get_profile(self) -> User:
        """
        Return the current profile (first user).

        Raises:
            NotFoundError: If there are no users
        """
        with self._lock:
            return self._current_user().model_copy(deep=True)

    def update_profile(self, payload: ProfileUpdate) -> User:
        """
        Update non-empty profile fields.

        Raises:
            NotFoundError: If there are no users
        """
        with self._lock:
            user = self._current_user()
            for field in ("first_name", "last_name", "bio", "avatar"):
                value = getattr(payload, field)
                if value:
                    setattr(user, field, value)
            user.updated_at = self._clock()
            return user.model_copy(deep=True)

    # Aggregates

    def analytics(self, period: str = "month") -> AnalyticsResponse:
        """Aggregate statistics across all collections."""
        with self._lock:
            return compute_analytics(
                _snapshot(self._articles), self._comments, self._users, period
            )

    def search(self, query: str | None, search_type: str, limit: int) -> SearchResponse:
        """
        Search across collections.

        Raises:
            ValidationError: If the query is shorter than two characters
        """
        with self._lock:
            return search_collections(
                query,
                search_type,
                limit,
                _snapshot(self._articles),
                _snapshot(self._comments),
                _snapshot(self._users),
            )

    def counts(self) -> dict[str, int]:
        """Current collection sizes."""
        with self._lock:
            return {
                "totalArticles": len(self._articles),
                "totalUsers": len(self._users),
                "totalComments": len(self._comments),
            }

    # Internal

    def _find_article(self, article_id: str) -> Article | None:
        return next((a for a in self._articles if a.id == article_id), None)

    def _current_user(self) -> User:
        if not self._users:
            raise NotFoundError("User not found")
        return self._users[0]
