# services/rate_limiter.py
"""
Per-client request admission with a moving (sliding) window.

Backed by the `limits` library: MovingWindowRateLimiter over MemoryStorage,
which locks around each hit, so increment-and-check is atomic across
concurrent requests. Counters live in process memory and reset on restart.
"""
import logging
import math
import time
from typing import Optional

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage, Storage
from limits.strategies import MovingWindowRateLimiter

logger = logging.getLogger(__name__)


class RateLimiter:
    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: int = 15 * 60,
        storage: Optional[Storage] = None,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.item = RateLimitItemPerSecond(max_requests, window_seconds)
        self._strategy = MovingWindowRateLimiter(storage or MemoryStorage())

        logger.info(f"Rate limiter initialized: {max_requests} requests / {window_seconds}s per client")

    def allow(self, key: str) -> bool:
        """Record a request for `key`; False once the window is full."""
        return self._strategy.hit(self.item, key)

    def remaining(self, key: str) -> int:
        _, remaining = self._strategy.get_window_stats(self.item, key)
        return max(0, remaining)

    def retry_after(self, key: str) -> int:
        """Seconds until the oldest request for `key` leaves the window."""
        reset_time, _ = self._strategy.get_window_stats(self.item, key)
        return max(0, math.ceil(reset_time - time.time()))
