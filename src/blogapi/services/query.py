"""
Collection Query Helpers

Filtering, pagination and derived-field helpers over in-memory collections.
Everything here is a single linear pass over a sequence; callers are
responsible for holding the repository lock while the sequence is read.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from blogapi.models.blog import Article, Pagination

T = TypeVar("T")

EXCERPT_LENGTH = 150

_SLUG_SEPARATOR = re.compile(r"[^a-z0-9]+")


def parse_positive_int(value: str | int | None, default: int) -> int:
    """
    Parse a pagination parameter.

    Missing, non-numeric, zero or negative values fall back to ``default``.
    """
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


def parse_bool(value: str | bool | None, default: bool) -> bool:
    """
    Parse a boolean query parameter.

    Only an absent parameter yields ``default``. A supplied string is true
    exactly when it equals ``"true"``; any other value reads as false.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    return value == "true"


def paginate(items: Sequence[T], page: int, limit: int) -> tuple[list[T], Pagination]:
    """
    Slice ``items`` into a page and compute pagination metadata.

    ``total`` and ``totalPages`` always describe the full sequence. A page past
    the end yields an empty list.
    """
    start = (page - 1) * limit
    total = len(items)
    return list(items[start:start + limit]), Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
    )


def slugify(title: str) -> str:
    """Lowercase the title and replace runs of non-alphanumerics with ``-``."""
    return _SLUG_SEPARATOR.sub("-", title.lower())


def make_excerpt(content: str, excerpt: str | None = None) -> str:
    """Return the explicit excerpt or the first 150 characters plus an ellipsis."""
    if excerpt:
        return excerpt
    return content[:EXCERPT_LENGTH] + "..."


def contains_text(needle: str, *haystacks: str | None) -> bool:
    """Case-insensitive substring match against any non-empty haystack.

    ``needle`` must already be lowercased.
    """
    return any(haystack and needle in haystack.lower() for haystack in haystacks)


@dataclass(frozen=True)
class ArticleFilters:
    """
    Conjunctive article predicates.

    Unset predicates (``None``) are ignored. Filters apply in the order
    author, tag, published, search.
    """

    author: str | None = None
    tag: str | None = None
    published: bool | None = None
    search: str | None = None

    def predicates(self) -> list[Callable[[Article], bool]]:
        checks: list[Callable[[Article], bool]] = []
        if self.author:
            checks.append(lambda a: a.author is not None and a.author.id == self.author)
        if self.tag:
            checks.append(lambda a: self.tag in a.tags)
        if self.published is not None:
            checks.append(lambda a: a.published == self.published)
        if self.search:
            needle = self.search.lower()
            checks.append(lambda a: contains_text(needle, a.title, a.content))
        return checks

    def apply(self, articles: Sequence[Article]) -> list[Article]:
        """Return the articles satisfying every active predicate, in order."""
        filtered = list(articles)
        for check in self.predicates():
            filtered = [article for article in filtered if check(article)]
        return filtered
