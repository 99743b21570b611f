"""
Tests for the sliding window rate limiter.

Instants are passed explicitly in milliseconds.
"""

from __future__ import annotations

import pytest

from blogapi.middleware.rate_limiter import RateLimitPolicy, SlidingWindowRateLimiter


@pytest.fixture
def limiter():
    """Limiter allowing three requests per second, never sweeping on its own."""
    return SlidingWindowRateLimiter(
        RateLimitPolicy(limit=3, window_seconds=1, cleanup_interval=0),
        clock=lambda: 0,
    )


class TestSlidingWindowRateLimiter:
    """Tests for admission decisions."""

    def test_allows_up_to_limit(self, limiter):
        """Test that requests under the limit are allowed with remaining counts."""
        results = [limiter.admit("client", now=t) for t in (0, 100, 200)]

        assert [r.allowed for r in results] == [True, True, True]
        assert [r.remaining for r in results] == [2, 1, 0]
        assert [r.reset_in for r in results] == [1, 1, 1]
        assert [r.retry_after for r in results] == [0, 0, 0]

    def test_rejects_over_limit_with_retry_after(self, limiter):
        """Test that the request past the limit is rejected."""
        for t in (0, 100, 200):
            limiter.admit("client", now=t)

        result = limiter.admit("client", now=300)

        assert result.allowed is False
        assert result.remaining == 0
        assert result.reset_at == 1000
        assert result.retry_after == 1
        assert result.reset_in == 1

    def test_window_slides(self, limiter):
        """Test that expired requests stop counting."""
        for t in (0, 100, 200):
            limiter.admit("client", now=t)
        limiter.admit("client", now=300)

        result = limiter.admit("client", now=1001)

        assert result.allowed is True
        assert result.remaining == 1

    def test_rejections_are_not_recorded(self, limiter):
        """Test that rejected requests do not extend the block."""
        for t in (0, 100, 200):
            limiter.admit("client", now=t)
        for t in (300, 400, 500, 900):
            assert limiter.admit("client", now=t).allowed is False

        # Only the 0ms request has expired by 1050ms
        assert limiter.admit("client", now=1050).allowed is True
        assert limiter.admit("client", now=1060).allowed is False

    def test_clients_are_independent(self, limiter):
        """Test that limits are tracked per key."""
        for t in (0, 1, 2):
            limiter.admit("a", now=t)

        assert limiter.admit("a", now=3).allowed is False
        assert limiter.admit("b", now=3).allowed is True

    def test_uses_clock_when_now_omitted(self):
        """Test that the injected clock supplies the instant."""
        ticks = iter([0, 10, 20])
        limiter = SlidingWindowRateLimiter(
            RateLimitPolicy(limit=2, window_seconds=60), clock=lambda: next(ticks)
        )

        assert limiter.admit("client").allowed is True
        assert limiter.admit("client").allowed is True
        result = limiter.admit("client")

        assert result.allowed is False
        assert result.retry_after == 60

    def test_disabled_policy_allows_everything(self):
        """Test that a disabled policy never rejects."""
        limiter = SlidingWindowRateLimiter(
            RateLimitPolicy(limit=1, window_seconds=60, enabled=False)
        )

        results = [limiter.admit("client", now=0) for _ in range(5)]

        assert all(r.allowed for r in results)
        assert limiter.tracked_clients == 0

    @pytest.mark.parametrize(("limit", "window"), [(0, 60), (5, 0)])
    def test_invalid_policy(self, limit, window):
        """Test that degenerate policies are refused."""
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(RateLimitPolicy(limit=limit, window_seconds=window))


class TestCleanup:
    """Tests for expired history removal."""

    def test_compact_drops_expired_clients(self, limiter):
        """Test on-demand compaction."""
        limiter.admit("old", now=0)
        limiter.admit("recent", now=900)

        removed = limiter.compact(now=1500)

        assert removed == 1
        assert limiter.tracked_clients == 1

    def test_periodic_sweep(self):
        """Test that a sweep runs every cleanup_interval checks."""
        limiter = SlidingWindowRateLimiter(
            RateLimitPolicy(limit=10, window_seconds=1, cleanup_interval=3)
        )
        limiter.admit("a", now=0)
        limiter.admit("b", now=0)
        assert limiter.tracked_clients == 2

        # Third check triggers the sweep; a and b have expired by then
        limiter.admit("c", now=5000)

        assert limiter.tracked_clients == 1

    def test_reset(self, limiter):
        """Test that reset forgets every client."""
        for t in (0, 1, 2):
            limiter.admit("client", now=t)

        limiter.reset()

        assert limiter.tracked_clients == 0
        assert limiter.admit("client", now=3).allowed is True
