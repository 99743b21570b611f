"""
Demo Data

Mock records loaded into a fresh repository when demo seeding is enabled.
"""

from __future__ import annotations

from datetime import UTC, datetime

from blogapi.models.blog import Article, AuthorSummary, Comment, User
from blogapi.services.repository import BlogRepository

DEMO_ARTICLE_ID = "123e4567-e89b-12d3-a456-426614174000"
DEMO_AUTHOR_ID = "123e4567-e89b-12d3-a456-426614174001"
DEMO_COMMENT_ID = "123e4567-e89b-12d3-a456-426614174002"
DEMO_COMMENTER_ID = "123e4567-e89b-12d3-a456-426614174003"


def _ts(day: int) -> datetime:
    return datetime(2023, 1, day, tzinfo=UTC)


def demo_articles() -> list[Article]:
    return [
        Article(
            id=DEMO_ARTICLE_ID,
            title="Getting Started with API Documentation",
            slug="getting-started-with-api-documentation",
            content="This is a comprehensive guide to API documentation...",
            excerpt="A brief introduction to API documentation best practices",
            author=AuthorSummary(
                id=DEMO_AUTHOR_ID,
                username="johndoe",
                email="john.doe@example.com",
                first_name="John",
                last_name="Doe",
            ),
            tags=["api", "documentation", "tutorial"],
            published=True,
            published_at=_ts(1),
            view_count=1250,
            like_count=42,
            comment_count=8,
            created_at=_ts(1),
            updated_at=_ts(1),
        )
    ]


def demo_comments() -> list[Comment]:
    return [
        Comment(
            id=DEMO_COMMENT_ID,
            content="Great article! Very helpful for beginners.",
            author=AuthorSummary(
                id=DEMO_COMMENTER_ID,
                username="janedoe",
                email="jane.doe@example.com",
                first_name="Jane",
                last_name="Doe",
            ),
            article_id=DEMO_ARTICLE_ID,
            likes=5,
            created_at=_ts(2),
            updated_at=_ts(2),
        )
    ]


def demo_users() -> list[User]:
    return [
        User(
            id=DEMO_AUTHOR_ID,
            username="johndoe",
            email="john.doe@example.com",
            first_name="John",
            last_name="Doe",
            bio="Full-stack developer passionate about APIs",
            role="writer",
            article_count=15,
            follower_count=250,
            following_count=180,
            created_at=_ts(1),
            updated_at=_ts(1),
        )
    ]


def create_demo_repository(**kwargs) -> BlogRepository:
    """Build a repository pre-populated with the demo records."""
    return BlogRepository(
        articles=demo_articles(),
        comments=demo_comments(),
        users=demo_users(),
        **kwargs,
    )
