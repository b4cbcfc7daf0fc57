"""
Rate Limiter - Token bucket admission control per backend.

Tokens refill lazily on every access at `requests_per_second`, up to
`burst_size`. Each admitted call consumes one token.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Callable

from .models import RateLimiterConfig

logger = logging.getLogger(__name__)

__all__ = ["RateLimiter", "RateLimiterRegistry"]


class RateLimiter:
    """
    Token bucket rate limiter.

    Example:
        >>> limiter = RateLimiter(RateLimiterConfig(requests_per_second=5, burst_size=10))
        >>> await limiter.acquire()
        >>> limiter.try_acquire()
        True
    """

    def __init__(
        self,
        config: RateLimiterConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize a full bucket.

        Args:
            config: Rate and burst size. Uses defaults if None.
            clock: Monotonic time source in seconds
        """
        self.config = config or RateLimiterConfig()
        self._clock = clock
        self._max_tokens = float(self.config.burst_size)
        self._refill_rate = self.config.requests_per_second
        self._tokens = self._max_tokens
        self._last_refill = clock()
        # Guards refill + deduction; never held across an await.
        self._lock = threading.Lock()

    @property
    def max_tokens(self) -> float:
        return self._max_tokens

    def _refill(self) -> None:
        now = self._clock()
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(self._max_tokens, self._tokens + elapsed * self._refill_rate)
            self._last_refill = now

    def try_acquire(self) -> bool:
        """Take a token if one is available. Never blocks."""
        with self._lock:
            self._refill()
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False

    async def acquire(self) -> None:
        """Take a token, waiting 1/rate seconds between attempts."""
        wait = 1.0 / self._refill_rate
        while not self.try_acquire():
            logger.debug("Rate limited, retrying in %.3fs", wait)
            await asyncio.sleep(wait)

    def available_tokens(self) -> float:
        """Current token count after refill."""
        with self._lock:
            self._refill()
            return self._tokens


class RateLimiterRegistry:
    """One limiter per backend identity, created on first use."""

    def __init__(self, config: RateLimiterConfig | None = None) -> None:
        self._config = config or RateLimiterConfig()
        self._limiters: dict[str, RateLimiter] = {}
        self._lock = threading.Lock()

    def get(self, backend: str) -> RateLimiter:
        """Get (or create) the limiter for a backend."""
        with self._lock:
            limiter = self._limiters.get(backend)
            if limiter is None:
                limiter = RateLimiter(self._config)
                self._limiters[backend] = limiter
            return limiter

    def set(self, backend: str, limiter: RateLimiter) -> None:
        """Bind a specifically configured limiter to a backend."""
        with self._lock:
            self._limiters[backend] = limiter

    def backends(self) -> list[str]:
        with self._lock:
            return list(self._limiters)
