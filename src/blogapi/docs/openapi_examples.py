"""
OpenAPI examples for request/response models.

Provides realistic examples for API documentation and interactive testing.
"""

from __future__ import annotations

ARTICLE_CREATE_EXAMPLES = {
    "draft": {
        "summary": "Draft article",
        "description": "Unpublished article; the excerpt is derived from the content",
        "value": {
            "title": "Designing Pagination for REST APIs",
            "content": "Pagination keeps list endpoints fast and predictable...",
            "tags": ["api", "design"],
        },
    },
    "published": {
        "summary": "Published article",
        "description": "Article published immediately with an explicit excerpt",
        "value": {
            "title": "Getting Started with API Documentation",
            "content": "This is a comprehensive guide to API documentation...",
            "excerpt": "A brief introduction to API documentation best practices",
            "tags": ["api", "documentation", "tutorial"],
            "published": True,
        },
    },
}

COMMENT_CREATE_EXAMPLES = {
    "top_level": {
        "summary": "Top-level comment",
        "value": {"content": "Great article! Very helpful for beginners."},
    },
    "reply": {
        "summary": "Reply to a comment",
        "value": {
            "content": "Agreed, the pagination section was the best part.",
            "parentId": "123e4567-e89b-12d3-a456-426614174002",
        },
    },
}

PROFILE_UPDATE_EXAMPLE = {
    "firstName": "John",
    "lastName": "Doe",
    "bio": "Full-stack developer passionate about APIs",
    "avatar": "https://example.com/avatars/johndoe.png",
}

VALIDATION_ERROR_EXAMPLE = {
    "error": "Validation Error",
    "message": "Title and content are required",
    "code": 400,
    "details": [
        {"field": "title", "message": "Title is required"},
        {"field": "content", "message": "Content is required"},
    ],
}

RATE_LIMIT_ERROR_EXAMPLE = {
    "error": "Too Many Requests",
    "message": "Rate limit exceeded. Please try again later.",
    "code": 429,
    "retryAfter": 42,
}
