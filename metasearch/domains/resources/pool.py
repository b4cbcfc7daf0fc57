"""
Connection Pool - Bounds in-flight outbound requests across all backends.

Also owns the shared `httpx.AsyncClient` handed to backend adapters, so
keep-alive connections are reused between tiers.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import httpx

from .models import PoolConfig

logger = logging.getLogger(__name__)

__all__ = ["ConnectionPool"]

T = TypeVar("T")


class ConnectionPool:
    """
    Fixed-capacity permit pool.

    Example:
        >>> pool = ConnectionPool(PoolConfig(max_concurrent=5))
        >>> results = await pool.call(backend.search, "rust", 10)
        >>> async with pool.permit():
        ...     response = await pool.client.get(url)
    """

    def __init__(self, config: PoolConfig | None = None) -> None:
        """
        Initialize pool.

        Args:
            config: Pool configuration. Uses defaults if None.
        """
        self.config = config or PoolConfig()
        self._semaphore = asyncio.Semaphore(self.config.max_concurrent)
        self._active = 0
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Shared HTTP client (created lazily)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.request_timeout),
                limits=httpx.Limits(
                    max_connections=self.config.max_concurrent,
                    max_keepalive_connections=self.config.max_idle_per_host,
                    keepalive_expiry=self.config.idle_timeout,
                ),
                follow_redirects=True,
            )
        return self._client

    @asynccontextmanager
    async def permit(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the block."""
        await self._semaphore.acquire()
        self._active += 1
        try:
            yield
        finally:
            self._active -= 1
            self._semaphore.release()

    async def call(
        self,
        op: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Run `op(*args, **kwargs)` while holding a permit."""
        async with self.permit():
            return await op(*args, **kwargs)

    def active_permits(self) -> int:
        """Number of permits currently held."""
        return self._active

    def available_permits(self) -> int:
        return self.config.max_concurrent - self._active

    async def aclose(self) -> None:
        """Close the shared HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("Connection pool closed")
