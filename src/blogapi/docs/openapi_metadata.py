"""
OpenAPI metadata and configuration for the blog API documentation.

Provides tags, descriptions, security schemes, servers and contact details.
"""

from __future__ import annotations

# OpenAPI tags for endpoint grouping
OPENAPI_TAGS = [
    {
        "name": "articles",
        "description": """
Blog articles with filtering, free-text search and pagination.

**Filters:** `author`, `tag`, `published`, `search` (all combined with AND).
Fetching a single article increments its view count.
        """,
    },
    {
        "name": "comments",
        "description": "Threaded comments attached to articles.",
    },
    {
        "name": "users",
        "description": "Profile of the authenticated user. Requires a bearer token.",
    },
    {
        "name": "analytics",
        "description": "Aggregate statistics: totals, top articles and engagement averages.",
    },
    {
        "name": "search",
        "description": "Case-insensitive search across articles, comments and users.",
    },
    {
        "name": "documentation",
        "description": """
OpenAPI document endpoints and spec analytics.

- `/spec.json`, `/spec.yaml`: the served OpenAPI document
- `/api/stats`, `/api/paths`, `/api/spec/tags`, `/api/version`: spec metadata
        """,
    },
    {
        "name": "health",
        "description": "Health check and system status endpoints. No authentication required.",
    },
]

OPENAPI_LICENSE = {
    "name": "MIT",
    "url": "https://opensource.org/licenses/MIT",
}

OPENAPI_CONTACT = {
    "name": "Blog API Support",
    "email": "api-support@example.com",
}

OPENAPI_SECURITY_SCHEMES = {
    "BearerAuth": {
        "type": "http",
        "scheme": "bearer",
        "bearerFormat": "JWT",
        "description": "Demo bearer token (any token of at least 10 characters)",
    },
}

OPENAPI_DESCRIPTION = """
# Blog API

Example blog REST API served alongside its interactive documentation.

## Features

- **Articles & comments:** in-memory collections with filtering and pagination
- **Search & analytics:** cross-collection search, engagement statistics
- **Documentation:** Swagger UI, ReDoc, JSON and YAML spec endpoints
- **Middleware:** CORS, gzip compression, security headers, rate limiting

## Authentication

Write endpoints and the profile/analytics endpoints require a bearer token:

```bash
curl -X POST "http://localhost:3003/api/articles" \\
  -H "Authorization: Bearer demo-token-123" \\
  -H "Content-Type: application/json" \\
  -d '{"title": "Hello", "content": "First post"}'
```

## Rate Limiting

Requests under `/api` are limited per client address (100 requests per
15 minutes by default). Throttled requests receive `429` with a `retryAfter`
hint in seconds and a `Retry-After` header.

## Errors

Every error response has the shape:

```json
{"error": "Validation Error", "message": "Title and content are required", "code": 400}
```
"""


def servers(server_url: str) -> list[dict[str, str]]:
    """Servers advertised in the OpenAPI document."""
    return [{"url": server_url, "description": "Local development server"}]
