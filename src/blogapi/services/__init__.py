"""
Blog services.

In-memory collection query engine: repository, filtering, pagination,
search, analytics and tag indexing.
"""

from blogapi.services.query import ArticleFilters, paginate, parse_bool, parse_positive_int
from blogapi.services.repository import BlogRepository

__all__ = [
    "ArticleFilters",
    "BlogRepository",
    "paginate",
    "parse_bool",
    "parse_positive_int",
]
