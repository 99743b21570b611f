"""
Analytics and Tag Indexing

Aggregate statistics over the blog collections and tag cross-tabulation.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from blogapi.models.blog import (
    AnalyticsResponse,
    Article,
    Comment,
    Engagement,
    TopArticle,
    User,
)

T = TypeVar("T")

TOP_ARTICLES_LIMIT = 5


def average(values: Sequence[int]) -> float:
    """Arithmetic mean, defined as 0 for an empty sequence."""
    if not values:
        return 0
    return sum(values) / len(values)


def top_articles(articles: Sequence[Article], limit: int = TOP_ARTICLES_LIMIT) -> list[Article]:
    """
    Most viewed articles, highest first.

    ``sorted`` is stable, so ties keep collection order; the collection
    itself is never reordered.
    """
    return sorted(articles, key=lambda article: article.view_count, reverse=True)[:limit]


def compute_analytics(
    articles: Sequence[Article],
    comments: Sequence[Comment],
    users: Sequence[User],
    period: str = "month",
) -> AnalyticsResponse:
    """Compute totals, the top articles and engagement averages."""
    views = [article.view_count for article in articles]
    return AnalyticsResponse(
        period=period,
        total_articles=len(articles),
        total_comments=len(comments),
        total_users=len(users),
        total_views=sum(views),
        top_articles=[
            TopArticle(
                article=article,
                views=article.view_count,
                likes=article.like_count,
                comments=article.comment_count,
            )
            for article in top_articles(articles)
        ],
        engagement=Engagement(
            avg_views_per_article=average(views),
            avg_comments_per_article=average([a.comment_count for a in articles]),
            avg_likes_per_article=average([a.like_count for a in articles]),
        ),
    )


def build_tag_index(
    items: Iterable[T],
    tags_of: Callable[[T], Iterable[str] | None],
) -> dict[str, list[T]]:
    """
    Group items by tag.

    Tags are matched exactly (case-sensitive) and keyed in first-seen order;
    each value lists the referencing items in iteration order. Only tags
    present on at least one item appear.
    """
    index: dict[str, list[T]] = {}
    for item in items:
        for tag in tags_of(item) or ():
            index.setdefault(tag, []).append(item)
    return index
