"""Moving-window rate limiter keyed by caller identity."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import MovingWindowRateLimiter

logger = logging.getLogger(__name__)


@dataclass
class RateLimitInfo:
    """Outcome of a rate-limit check with quota information."""

    allowed: bool
    remaining: int
    limit: int
    retry_after: int | None = None  # seconds until the next slot frees up


class SlidingWindowRateLimiter:
    """Allows at most *max_requests* per *window_seconds* for each key.

    Backed by the ``limits`` moving-window strategy: a request is counted
    only when accepted, and each slot frees up *window_seconds* after the
    request that took it.
    """

    def __init__(
        self,
        max_requests: int = 5,
        window_seconds: int = 900,
        storage: Storage | None = None,
    ) -> None:
        self.max_requests = max_requests
        self.window = window_seconds
        self._item = RateLimitItemPerSecond(max_requests, window_seconds)
        self._limiter = MovingWindowRateLimiter(storage or MemoryStorage())

    def check(self, key: str) -> RateLimitInfo:
        """Record a request for *key* if the window has room."""
        if self._limiter.hit(self._item, key):
            stats = self._limiter.get_window_stats(self._item, key)
            return RateLimitInfo(
                allowed=True, remaining=stats.remaining, limit=self.max_requests
            )

        stats = self._limiter.get_window_stats(self._item, key)
        retry_after = max(1, math.ceil(stats.reset_time - time.time()))
        logger.warning("Rate limit exceeded for %s (retry in %ss)", key, retry_after)
        return RateLimitInfo(
            allowed=False,
            remaining=0,
            limit=self.max_requests,
            retry_after=retry_after,
        )

    def reset(self, key: str) -> None:
        """Forget all recorded requests for *key*."""
        self._limiter.clear(self._item, key)
