"""Tests for the result cache."""

from __future__ import annotations

import pytest

from metasearch.config.errors import CacheError
from metasearch.domains.search.models import SearchResult

from .cache import ResultCache
from .models import CacheConfig, CachedBatch, CachedSearchResult


class FakeClock:
    def __init__(self) -> None:
        self.now = 1_700_000_000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def results() -> list[SearchResult]:
    return [
        SearchResult(
            title="Test Result 1",
            url="https://example.com/1",
            snippet="Test snippet 1",
        ),
        SearchResult(
            title="Test Result 2",
            url="https://example.com/2",
            snippet="Test snippet 2",
            content="Full content here",
        ),
    ]


@pytest.fixture
def cache(clock: FakeClock) -> ResultCache:
    return ResultCache(CacheConfig(max_size=100, ttl_seconds=3600), clock=clock)


def test_store_and_get(cache: ResultCache, results: list[SearchResult]) -> None:
    """store then get with the same key returns the same logical results."""
    cache.store("test_query", results)

    batch = cache.get("test_query")
    assert batch is not None
    assert batch.to_search_results() == results


def test_timestamps_attached(
    cache: ResultCache, results: list[SearchResult], clock: FakeClock
) -> None:
    """Every cached element carries the creation timestamp."""
    cache.store("q", results)
    batch = cache.get("q")
    assert batch is not None
    assert batch.created_at == int(clock.now)
    assert all(r.timestamp == int(clock.now) for r in batch.results)


def test_tier_recorded(cache: ResultCache, results: list[SearchResult]) -> None:
    cache.store("q", results, tier="L2")
    batch = cache.get("q")
    assert batch is not None
    assert batch.tier == "L2"


def test_key_is_normalized(cache: ResultCache, results: list[SearchResult]) -> None:
    """Case and whitespace differences hit the same entry."""
    cache.store("Rust   Security", results)
    assert cache.contains("rust security")
    assert ResultCache.generate_key("Rust Security") == ResultCache.generate_key(" rust security ")


def test_cache_miss(cache: ResultCache) -> None:
    assert cache.get("nonexistent") is None
    assert not cache.contains("nonexistent")


def test_expired_entry_is_miss(
    cache: ResultCache, results: list[SearchResult], clock: FakeClock
) -> None:
    """get after ttl_seconds have elapsed returns a miss."""
    cache.store("q", results)

    clock.now += 3600
    assert cache.get("q") is not None  # exactly at TTL still valid

    clock.now += 1
    assert cache.get("q") is None
    # Expired entries are skipped, not purged
    assert cache.size() == 1


def test_eviction_keeps_size_bounded(clock: FakeClock, results: list[SearchResult]) -> None:
    """Each insert beyond max_size evicts exactly one entry."""
    cache = ResultCache(CacheConfig(max_size=2, ttl_seconds=3600), clock=clock)

    cache.store("key1", results)
    cache.store("key2", results)
    assert cache.size() == 2

    cache.store("key3", results)
    assert cache.size() == 2

    cache.store("key4", results)
    assert cache.size() == 2


def test_eviction_is_by_insertion_order(clock: FakeClock, results: list[SearchResult]) -> None:
    """Reads do not refresh recency: the first inserted entry goes first."""
    cache = ResultCache(CacheConfig(max_size=2, ttl_seconds=3600), clock=clock)
    cache.store("key1", results)
    cache.store("key2", results)

    cache.get("key1")
    cache.store("key3", results)

    assert not cache.contains("key1")
    assert cache.contains("key2")
    assert cache.contains("key3")


def test_replacing_key_does_not_evict(clock: FakeClock, results: list[SearchResult]) -> None:
    cache = ResultCache(CacheConfig(max_size=2, ttl_seconds=3600), clock=clock)
    cache.store("key1", results)
    cache.store("key2", results)
    cache.store("key2", results[:1])

    assert cache.contains("key1")
    batch = cache.get("key2")
    assert batch is not None
    assert len(batch.results) == 1


def test_clear(cache: ResultCache, results: list[SearchResult]) -> None:
    cache.store("test1", results)
    cache.store("test2", results)
    assert cache.size() == 2

    cache.clear()
    assert cache.size() == 0


def test_remove(cache: ResultCache, results: list[SearchResult]) -> None:
    cache.store("test_query", results)
    assert cache.contains("test_query")

    assert cache.remove("test_query") is True
    assert not cache.contains("test_query")
    assert cache.remove("test_query") is False


def test_stats(cache: ResultCache, results: list[SearchResult]) -> None:
    cache.store("test", results)

    stats = cache.stats()
    assert stats.entries == 1
    assert stats.total_bytes > 0
    assert stats.max_size == 100
    assert stats.ttl_seconds == 3600


def test_corrupt_entry_reads_as_miss(cache: ResultCache) -> None:
    """Undecodable payloads are treated as a miss, never an error."""
    cache._cache[ResultCache.generate_key("bad")] = b"not json"
    assert cache.get("bad") is None


def test_serialization_failure_raises_cache_error(cache: ResultCache) -> None:
    """A write that cannot be serialized is reported as CacheError."""
    bad = CachedSearchResult.model_construct(
        title=object(), url="https://x", snippet=None, content=None, timestamp=0
    )
    with pytest.raises(CacheError):
        cache.store("q", [bad])
    assert cache.size() == 0


def test_empty_batch_roundtrip(cache: ResultCache, clock: FakeClock) -> None:
    cache.store("empty", [])
    batch = cache.get("empty")
    assert batch == CachedBatch(results=[], tier=None, created_at=int(clock.now))


def test_empty_batch_expires(cache: ResultCache, clock: FakeClock) -> None:
    """An empty answer is still bound by the TTL."""
    cache.store("empty", [], tier="L1")

    clock.now += 3601
    assert cache.get("empty") is None
    assert not cache.contains("empty")


def test_cached_result_conversion() -> None:
    """Round-trip through the cached form preserves every field but the timestamp."""
    result = SearchResult(title="Test", url="https://example.com", snippet="Snippet")

    cached = CachedSearchResult.from_search_result(result)
    assert cached.title == "Test"
    assert cached.url == "https://example.com"
    assert cached.timestamp > 0

    assert cached.to_search_result() == result
