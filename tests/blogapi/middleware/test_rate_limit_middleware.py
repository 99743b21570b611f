"""
Tests for the rate limiting middleware.
"""

from __future__ import annotations

import time

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from blogapi.main import create_app
from blogapi.middleware.rate_limit import RateLimitMiddleware
from blogapi.middleware.rate_limiter import RateLimitPolicy, SlidingWindowRateLimiter


def _limiter(limit: int) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(RateLimitPolicy(limit=limit, window_seconds=900))


@pytest.fixture
def limited_client(repository):
    """Application client allowing two API requests per window."""
    return TestClient(create_app(repository=repository, rate_limiter=_limiter(2)))


class TestRateLimitMiddleware:
    """Tests for API rate limiting."""

    def test_allowed_requests_carry_headers(self, limited_client):
        """Test X-RateLimit headers on admitted requests."""
        response = limited_client.get("/api/articles")

        assert response.status_code == 200
        assert response.headers["X-RateLimit-Limit"] == "2"
        assert response.headers["X-RateLimit-Remaining"] == "1"
        assert "Retry-After" not in response.headers

    def test_reset_header_is_unix_time(self, limited_client):
        """Test that X-RateLimit-Reset is a Unix timestamp within one window."""
        before = int(time.time())

        response = limited_client.get("/api/articles")

        reset = int(response.headers["X-RateLimit-Reset"])
        assert before + 899 <= reset <= int(time.time()) + 900

    def test_throttled_reset_matches_retry_after(self, limited_client):
        """Test that the reset instant of a 429 agrees with Retry-After."""
        limited_client.get("/api/articles")
        limited_client.get("/api/articles")
        before = int(time.time())

        response = limited_client.get("/api/articles")

        retry_after = int(response.headers["Retry-After"])
        reset = int(response.headers["X-RateLimit-Reset"])
        assert before + retry_after <= reset <= int(time.time()) + retry_after

    def test_throttled_request(self, limited_client):
        """Test the 429 body once the limit is exhausted."""
        limited_client.get("/api/articles")
        limited_client.get("/api/tags")

        response = limited_client.get("/api/articles")

        assert response.status_code == 429
        body = response.json()
        assert body["error"] == "Too Many Requests"
        assert body["message"] == "Rate limit exceeded. Please try again later."
        assert body["code"] == 429
        assert 0 < body["retryAfter"] <= 900
        assert response.headers["Retry-After"] == str(body["retryAfter"])
        assert response.headers["X-RateLimit-Remaining"] == "0"

    def test_throttled_request_skips_handler(self, limited_client, repository):
        """Test that a rejected fetch does not count a view."""
        article_id = "123e4567-e89b-12d3-a456-426614174000"
        limited_client.get(f"/api/articles/{article_id}")
        limited_client.get(f"/api/articles/{article_id}")

        response = limited_client.get(f"/api/articles/{article_id}")

        assert response.status_code == 429
        assert repository.get_article(article_id).view_count == 1253

    def test_non_api_paths_are_not_limited(self, limited_client):
        """Test that health and docs paths bypass the limiter."""
        for _ in range(5):
            assert limited_client.get("/health").status_code == 200
        assert limited_client.get("/spec.json").status_code == 200
        assert limited_client.get("/api/articles").status_code == 200

    def test_unknown_api_routes_count(self, limited_client):
        """Test that unknown API routes still consume the allowance."""
        limited_client.get("/api/nope")
        limited_client.get("/api/nope")

        assert limited_client.get("/api/articles").status_code == 429


class TestClientIdentification:
    """Tests for client key extraction."""

    def _app(self, limiter, trust_proxy_headers):
        app = FastAPI()
        app.add_middleware(
            RateLimitMiddleware,
            rate_limiter=limiter,
            trust_proxy_headers=trust_proxy_headers,
        )

        @app.get("/api/ping")
        async def ping():
            return {"ok": True}

        return app

    def test_forwarded_for_used_when_trusted(self):
        """Test that trusted proxy headers separate clients."""
        client = TestClient(self._app(_limiter(1), trust_proxy_headers=True))

        first = client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1, 172.16.0.1"})
        second = client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.2"})
        third = client.get("/api/ping", headers={"X-Real-IP": "10.0.0.3"})
        repeat = client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"})

        assert [r.status_code for r in (first, second, third)] == [200, 200, 200]
        assert repeat.status_code == 429

    def test_forwarded_for_ignored_by_default(self):
        """Test that spoofed headers cannot bypass the limit."""
        client = TestClient(self._app(_limiter(1), trust_proxy_headers=False))

        client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"})
        response = client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.2"})

        assert response.status_code == 429

    def test_prefix_match_is_segment_aware(self):
        """Test that /apiary is not treated as an API path."""
        limiter = _limiter(1)
        middleware = RateLimitMiddleware(FastAPI(), rate_limiter=limiter)

        assert middleware._is_limited_path("/api")
        assert middleware._is_limited_path("/api/articles")
        assert not middleware._is_limited_path("/apiary")
        assert not middleware._is_limited_path("/health")
