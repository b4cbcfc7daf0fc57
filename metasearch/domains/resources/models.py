"""
Resource Models - Configuration and cache payload types.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from metasearch.domains.search.models import SearchResult


class RateLimiterConfig(BaseModel):
    """Token bucket configuration."""

    requests_per_second: float = Field(default=10.0, gt=0)
    burst_size: int = Field(default=10, gt=0)


class PoolConfig(BaseModel):
    """Connection pool configuration."""

    max_concurrent: int = Field(default=10, gt=0)
    max_idle_per_host: int = Field(default=20, gt=0)
    idle_timeout: float = Field(default=90.0, gt=0)  # seconds
    request_timeout: float = Field(default=30.0, gt=0)  # seconds


class CacheConfig(BaseModel):
    """Result cache configuration."""

    max_size: int = Field(default=1000, gt=0)
    ttl_seconds: int = Field(default=3600, gt=0)


class CachedSearchResult(BaseModel):
    """Search result as held by the cache, stamped with its creation time."""

    title: str
    url: str
    snippet: str | None = None
    content: str | None = None
    timestamp: int = Field(default_factory=lambda: int(time.time()))

    @classmethod
    def from_search_result(
        cls, result: SearchResult, timestamp: int | None = None
    ) -> CachedSearchResult:
        return cls(
            title=result.title,
            url=result.url,
            snippet=result.snippet,
            content=result.content,
            timestamp=int(time.time()) if timestamp is None else timestamp,
        )

    def to_search_result(self) -> SearchResult:
        return SearchResult(
            title=self.title,
            url=self.url,
            snippet=self.snippet,
            content=self.content,
        )


class CachedBatch(BaseModel):
    """One cache entry: the ordered results of a query plus the tier that produced them."""

    results: list[CachedSearchResult] = Field(default_factory=list)
    tier: str | None = None
    # Batch creation time; elements carry the same stamp
    created_at: int = Field(default_factory=lambda: int(time.time()))

    def to_search_results(self) -> list[SearchResult]:
        return [r.to_search_result() for r in self.results]


class CacheStats(BaseModel):
    """Cache statistics."""

    entries: int
    total_bytes: int
    max_size: int
    ttl_seconds: int
