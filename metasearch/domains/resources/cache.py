"""
Result Cache - In-memory search result caching with TTL support.

Entries are stored as serialized JSON bytes keyed by a content address of
the normalized query text. Expired entries are skipped on read, not
purged. At capacity the oldest inserted entry is evicted; reads do not
refresh recency.
"""

from __future__ import annotations

import hashlib
import logging
import threading
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from pydantic import ValidationError

from metasearch.config.errors import CacheError
from metasearch.domains.search.models import SearchResult

from .models import CacheConfig, CachedBatch, CachedSearchResult, CacheStats

logger = logging.getLogger(__name__)

__all__ = ["ResultCache"]


class _ReadWriteLock:
    """Many concurrent readers or one writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ResultCache:
    """
    In-memory result cache with TTL.

    Example:
        >>> cache = ResultCache(CacheConfig(max_size=100, ttl_seconds=600))
        >>> cache.store("rust security", results, tier="L1")
        >>> batch = cache.get("Rust  Security")
        >>> batch.to_search_results()
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize cache.

        Args:
            config: Size bound and TTL. Uses defaults if None.
            clock: Wall-clock time source in seconds
        """
        self.config = config or CacheConfig()
        self._clock = clock
        # dict preserves insertion order; the first key is the eviction victim
        self._cache: dict[str, bytes] = {}
        self._lock = _ReadWriteLock()

    @property
    def max_size(self) -> int:
        return self.config.max_size

    @property
    def ttl_seconds(self) -> int:
        return self.config.ttl_seconds

    def store(
        self,
        key: str,
        results: Sequence[SearchResult | CachedSearchResult],
        tier: str | None = None,
    ) -> None:
        """
        Cache a result set.

        Raises:
            CacheError: The batch could not be serialized
        """
        now = int(self._clock())
        cached = [
            r.model_copy(update={"timestamp": now})
            if isinstance(r, CachedSearchResult)
            else CachedSearchResult.from_search_result(r, timestamp=now)
            for r in results
        ]
        try:
            batch = CachedBatch(results=cached, tier=tier, created_at=now)
            payload = batch.model_dump_json().encode()
        except (ValueError, TypeError) as e:
            raise CacheError(f"Failed to serialize results: {e}", {"key": key}) from e

        cache_key = self.generate_key(key)
        with self._lock.write():
            if cache_key not in self._cache and len(self._cache) >= self.config.max_size:
                self._evict_oldest()
            self._cache[cache_key] = payload

        logger.debug("Cached %d results: %s", len(cached), cache_key[:16])

    def get(self, key: str) -> CachedBatch | None:
        """Get cached results if present and not expired."""
        cache_key = self.generate_key(key)
        with self._lock.read():
            payload = self._cache.get(cache_key)
        if payload is None:
            return None

        try:
            batch = CachedBatch.model_validate_json(payload)
        except ValidationError:
            logger.warning("Corrupt cache entry ignored: %s", cache_key[:16])
            return None

        if self._clock() - batch.created_at > self.config.ttl_seconds:
            logger.debug("Cache entry expired: %s", cache_key[:16])
            return None

        logger.debug("Cache hit: %s", cache_key[:16])
        return batch

    def contains(self, key: str) -> bool:
        """Check for a live (unexpired) entry."""
        return self.get(key) is not None

    def remove(self, key: str) -> bool:
        """Remove an entry. Returns True if it existed."""
        with self._lock.write():
            return self._cache.pop(self.generate_key(key), None) is not None

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock.write():
            count = len(self._cache)
            self._cache.clear()
        logger.info("Cleared %d cache entries", count)

    def size(self) -> int:
        with self._lock.read():
            return len(self._cache)

    def _evict_oldest(self) -> None:
        """Evict the first inserted entry. Caller holds the write lock."""
        oldest = next(iter(self._cache), None)
        if oldest is not None:
            del self._cache[oldest]
            logger.debug("Evicted cache entry: %s", oldest[:16])

    def stats(self) -> CacheStats:
        """Get cache statistics."""
        with self._lock.read():
            entries = len(self._cache)
            total_bytes = sum(len(v) for v in self._cache.values())

        return CacheStats(
            entries=entries,
            total_bytes=total_bytes,
            max_size=self.config.max_size,
            ttl_seconds=self.config.ttl_seconds,
        )

    @staticmethod
    def normalize(query: str) -> str:
        """Lower-case and collapse whitespace."""
        return " ".join(query.lower().split())

    @classmethod
    def generate_key(cls, query: str) -> str:
        """Generate cache key from query text."""
        return hashlib.sha256(cls.normalize(query).encode()).hexdigest()[:32]
