"""
Resources Domain - Governors shared by every concurrent search.

This domain handles:
- Per-backend token bucket rate limiting
- Bounding in-flight outbound requests
- In-memory result caching with TTL
"""

from .cache import ResultCache
from .models import (
    CacheConfig,
    CachedBatch,
    CachedSearchResult,
    CacheStats,
    PoolConfig,
    RateLimiterConfig,
)
from .pool import ConnectionPool
from .rate_limiter import RateLimiter, RateLimiterRegistry

__all__ = [
    # Models
    "RateLimiterConfig",
    "PoolConfig",
    "CacheConfig",
    "CachedSearchResult",
    "CachedBatch",
    "CacheStats",
    # Implementations
    "RateLimiter",
    "RateLimiterRegistry",
    "ConnectionPool",
    "ResultCache",
]
