"""
Rate Limiter

In-memory sliding window rate limiter keyed by client.
"""

from __future__ import annotations

import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

MillisecondClock = Callable[[], int]


def monotonic_ms() -> int:
    """Monotonic clock in whole milliseconds."""
    return time.monotonic_ns() // 1_000_000


@dataclass
class RateLimitPolicy:
    """
    Rate limit policy configuration.

    Defines the limit and sweep behavior for a limiter instance.
    """

    limit: int  # Maximum requests allowed per window
    window_seconds: float  # Trailing window length in seconds
    cleanup_interval: int = 100  # Sweep expired clients every N checks
    enabled: bool = True

    @property
    def window_ms(self) -> int:
        return int(self.window_seconds * 1000)


@dataclass
class RateLimitResult:
    """
    Result of a rate limit check.

    Contains information about whether the request was allowed and metadata
    for client response headers.
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int  # Clock instant (ms) at which the oldest counted request expires
    retry_after: int  # Whole seconds to wait; 0 when allowed
    key: str
    reset_in: int = 0  # Whole seconds until reset_at


def _seconds_until(instant: int, now: int) -> int:
    return max(0, math.ceil((instant - now) / 1000))


class SlidingWindowRateLimiter:
    """
    Sliding window request counter.

    Keeps, per client key, the ordered request instants inside the trailing
    window. A rejected request is not recorded. Clients whose history has
    fully expired are dropped by a sweep that runs every
    ``policy.cleanup_interval`` checks, or on demand via :meth:`compact`.
    """

    def __init__(
        self,
        policy: RateLimitPolicy,
        clock: MillisecondClock = monotonic_ms,
    ) -> None:
        """
        Initialize rate limiter.

        Args:
            policy: Limit, window and sweep configuration
            clock: Millisecond clock; must be non-decreasing
        """
        if policy.limit < 1:
            raise ValueError("limit must be at least 1")
        if policy.window_ms <= 0:
            raise ValueError("window must be positive")

        self.policy = policy
        self._clock = clock
        self._history: dict[str, list[int]] = {}
        self._checks = 0
        self._lock = threading.Lock()

    @property
    def tracked_clients(self) -> int:
        """Number of client keys currently holding history."""
        with self._lock:
            return len(self._history)

    def admit(self, key: str, now: int | None = None) -> RateLimitResult:
        """
        Decide whether a request from ``key`` may proceed.

        Args:
            key: Client identifier (e.g. source address)
            now: Current instant in milliseconds (defaults to the clock)

        Returns:
            RateLimitResult with allow/deny decision and metadata
        """
        limit = self.policy.limit
        if not self.policy.enabled:
            return RateLimitResult(
                allowed=True, limit=limit, remaining=limit, reset_at=0, retry_after=0, key=key
            )

        window = self.policy.window_ms
        with self._lock:
            if now is None:
                now = self._clock()
            window_start = now - window
            recent = [t for t in self._history.get(key, ()) if t > window_start]

            if len(recent) >= limit:
                reset_at = recent[0] + window
                result = RateLimitResult(
                    allowed=False,
                    limit=limit,
                    remaining=0,
                    reset_at=reset_at,
                    retry_after=_seconds_until(reset_at, now),
                    key=key,
                    reset_in=_seconds_until(reset_at, now),
                )
                self._history[key] = recent
            else:
                recent.append(now)
                self._history[key] = recent
                result = RateLimitResult(
                    allowed=True,
                    limit=limit,
                    remaining=limit - len(recent),
                    reset_at=recent[0] + window,
                    retry_after=0,
                    key=key,
                    reset_in=_seconds_until(recent[0] + window, now),
                )

            self._checks += 1
            if self.policy.cleanup_interval > 0 and self._checks % self.policy.cleanup_interval == 0:
                self._sweep(now)

        return result

    def compact(self, now: int | None = None) -> int:
        """
        Drop clients with no requests inside the current window.

        Returns:
            Number of client keys removed
        """
        with self._lock:
            return self._sweep(self._clock() if now is None else now)

    def reset(self) -> None:
        """Forget all client history."""
        with self._lock:
            self._history.clear()
            self._checks = 0

    def _sweep(self, now: int) -> int:
        window_start = now - self.policy.window_ms
        removed = 0
        for key in list(self._history):
            valid = [t for t in self._history[key] if t > window_start]
            if valid:
                self._history[key] = valid
            else:
                del self._history[key]
                removed += 1

        if removed:
            logger.debug("Rate limit history compacted", removed=removed, tracked=len(self._history))
        return removed
