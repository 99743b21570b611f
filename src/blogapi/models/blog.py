"""
Blog Models

Pydantic models for the in-memory blog collections and their request and
response payloads. All payloads use camelCase keys on the wire.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthorSummary(CamelModel):
    """Author snapshot embedded in articles and comments."""

    id: str = Field(..., description="Author identifier")
    username: str = Field(..., description="Author username")
    email: str | None = Field(None, description="Author email")
    first_name: str | None = Field(None, description="Author first name")
    last_name: str | None = Field(None, description="Author last name")
    role: str | None = Field(None, description="Author role")


class User(CamelModel):
    """Registered user."""

    id: str = Field(..., description="User identifier")
    username: str = Field(..., description="Unique username")
    email: str = Field(..., description="Email address")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    bio: str | None = Field(None, description="Short biography")
    avatar: str | None = Field(None, description="Avatar URL")
    role: str = Field(default="reader", description="User role")
    article_count: int = Field(default=0, ge=0, description="Articles written")
    follower_count: int = Field(default=0, ge=0, description="Followers")
    following_count: int = Field(default=0, ge=0, description="Users followed")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class Article(CamelModel):
    """Blog article."""

    id: str = Field(..., description="Article identifier")
    title: str = Field(..., description="Article title")
    slug: str = Field(..., description="URL slug derived from the title")
    content: str = Field(..., description="Article body")
    excerpt: str = Field(..., description="Short summary")
    author: AuthorSummary | None = Field(None, description="Author snapshot")
    tags: list[str] = Field(default_factory=list, description="Article tags")
    published: bool = Field(default=False, description="Publication flag")
    published_at: datetime | None = Field(None, description="Publication timestamp")
    view_count: int = Field(default=0, ge=0, description="Number of views")
    like_count: int = Field(default=0, ge=0, description="Number of likes")
    comment_count: int = Field(default=0, ge=0, description="Number of comments")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class Comment(CamelModel):
    """Comment on an article."""

    id: str = Field(..., description="Comment identifier")
    content: str = Field(..., description="Comment body")
    author: AuthorSummary | None = Field(None, description="Author snapshot")
    article_id: str = Field(..., description="Commented article identifier")
    parent_id: str | None = Field(None, description="Parent comment for threads")
    likes: int = Field(default=0, ge=0, description="Number of likes")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


# Requests. Required fields are optional here so that the repository reports
# every missing field in a single ValidationError.


class ArticleCreate(CamelModel):
    """Article creation payload."""

    title: str | None = Field(None, description="Article title (required)")
    content: str | None = Field(None, description="Article body (required)")
    excerpt: str | None = Field(None, description="Short summary")
    tags: list[str] | None = Field(None, description="Article tags")
    published: bool | None = Field(None, description="Publish immediately")


class CommentCreate(CamelModel):
    """Comment creation payload."""

    content: str | None = Field(None, description="Comment body (required)")
    parent_id: str | None = Field(None, description="Parent comment identifier")


class ProfileUpdate(CamelModel):
    """Profile update payload. Empty values leave the field unchanged."""

    first_name: str | None = None
    last_name: str | None = None
    bio: str | None = None
    avatar: str | None = None


# Responses


class Pagination(CamelModel):
    """Pagination metadata computed over the filtered collection."""

    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Page size")
    total: int = Field(..., description="Matching records before pagination")
    total_pages: int = Field(..., description="ceil(total / limit)")


class ArticleListResponse(CamelModel):
    """Paginated article listing."""

    articles: list[Article]
    pagination: Pagination


class CommentListResponse(CamelModel):
    """Paginated comment listing."""

    comments: list[Comment]
    pagination: Pagination


class TopArticle(CamelModel):
    """Analytics entry for a top article."""

    article: Article
    views: int
    likes: int
    comments: int


class Engagement(CamelModel):
    """Per-article engagement averages."""

    avg_views_per_article: float
    avg_comments_per_article: float
    avg_likes_per_article: float


class AnalyticsResponse(CamelModel):
    """Aggregate analytics over all collections."""

    period: str
    total_articles: int
    total_comments: int
    total_users: int
    total_views: int
    top_articles: list[TopArticle]
    engagement: Engagement


class SearchResponse(CamelModel):
    """Search results. Types that were not requested are omitted."""

    query: str
    total_results: int
    articles: list[Article] | None = None
    comments: list[Comment] | None = None
    users: list[User] | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON payload without the result types that were not requested."""
        payload = self.model_dump(mode="json", by_alias=True)
        for key in ("articles", "comments", "users"):
            if payload[key] is None:
                del payload[key]
        return payload


class ArticleReference(CamelModel):
    """Lightweight article reference used in tag listings."""

    id: str
    title: str
    slug: str


class ArticleTag(CamelModel):
    """Article tag with its referencing articles."""

    name: str
    article_count: int
    articles: list[ArticleReference]


class ArticleTagsResponse(CamelModel):
    """Article tag index."""

    tags: list[ArticleTag]
