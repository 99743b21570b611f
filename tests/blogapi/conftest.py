"""Blog API pytest fixtures."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from blogapi.main import create_app
from blogapi.middleware.rate_limiter import RateLimitPolicy, SlidingWindowRateLimiter
from blogapi.models.blog import Article, AuthorSummary
from blogapi.services.demo_data import create_demo_repository

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class SteppingClock:
    """Clock advancing one second per call."""

    def __init__(self, start: datetime = FIXED_NOW) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


def _make_article(
    article_id: str,
    title: str = "Untitled",
    content: str = "Body",
    tags: list[str] | None = None,
    published: bool = True,
    views: int = 0,
    likes: int = 0,
    comments: int = 0,
    author_id: str = "author-1",
) -> Article:
    """Build an article with sensible defaults."""
    return Article(
        id=article_id,
        title=title,
        slug=title.lower(),
        content=content,
        excerpt=content[:10],
        author=AuthorSummary(id=author_id, username=author_id),
        tags=tags or [],
        published=published,
        view_count=views,
        like_count=likes,
        comment_count=comments,
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


@pytest.fixture
def make_article():
    """Factory for standalone articles."""
    return _make_article


@pytest.fixture
def id_factory():
    """Sequential identifier generator."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def clock():
    return SteppingClock()


@pytest.fixture
def repository(id_factory, clock):
    """Demo-seeded repository with deterministic ids and timestamps."""
    return create_demo_repository(id_factory=id_factory, clock=clock)


@pytest.fixture
def rate_limiter():
    """Generous limiter so functional tests are never throttled."""
    return SlidingWindowRateLimiter(RateLimitPolicy(limit=10_000, window_seconds=60))


@pytest.fixture
def app(repository, rate_limiter):
    return create_app(repository=repository, rate_limiter=rate_limiter)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer token accepted by the demo authentication."""
    return {"Authorization": "Bearer demo-token-123"}


@pytest.fixture
def client(app) -> TestClient:
    """Create test client."""
    return TestClient(app)
