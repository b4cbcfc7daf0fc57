"""
Service Wiring - Builds the search stack from settings.

Shared by the CLI and the API so both run the same backends behind the
same pool, limiters and cache.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from metasearch.adapters.duckduckgo import DuckDuckGoClient
from metasearch.adapters.exa import ExaClient
from metasearch.adapters.searxng import SearxngClient
from metasearch.adapters.tavily import TavilyClient
from metasearch.config import Settings
from metasearch.domains.orchestration import (
    ModelTier,
    RouterConfig,
    SemanticRouter,
    TieredConfig,
    TieredRetrieval,
)
from metasearch.domains.processing import ContextPruner
from metasearch.domains.resources import (
    CacheConfig,
    ConnectionPool,
    PoolConfig,
    RateLimiterConfig,
    RateLimiterRegistry,
    ResultCache,
)

logger = logging.getLogger(__name__)

__all__ = ["SearchServices", "build_router", "build_services"]


@dataclass
class SearchServices:
    """Long-lived components of one process."""

    pool: ConnectionPool
    limiters: RateLimiterRegistry
    cache: ResultCache
    router: SemanticRouter
    retrieval: TieredRetrieval
    searxng: SearxngClient

    async def aclose(self) -> None:
        await self.pool.aclose()


def build_router(settings: Settings) -> SemanticRouter:
    return SemanticRouter(
        RouterConfig(
            simple_max_length=settings.router_simple_max_length,
            complex_keywords=settings.router_complex_keywords,
            model_ids={
                ModelTier.FAST: settings.model_fast,
                ModelTier.BALANCED: settings.model_balanced,
                ModelTier.PREMIUM: settings.model_premium,
            },
        )
    )


def build_services(settings: Settings) -> SearchServices:
    """
    Wire backends, governors and engines.

    L2 (Exa) and L3 (Tavily) are only configured when their API keys are set.
    """
    pool = ConnectionPool(
        PoolConfig(
            max_concurrent=settings.pool_max_concurrent,
            max_idle_per_host=settings.pool_max_idle_per_host,
            idle_timeout=settings.pool_idle_timeout,
            request_timeout=settings.request_timeout,
        )
    )
    limiters = RateLimiterRegistry(
        RateLimiterConfig(
            requests_per_second=settings.rate_limit_rps,
            burst_size=settings.rate_limit_burst,
        )
    )
    cache = ResultCache(
        CacheConfig(max_size=settings.cache_max_size, ttl_seconds=settings.cache_ttl_seconds)
    )
    router = build_router(settings)

    client = pool.client
    exa = ExaClient(client, settings.exa_api_key, settings.exa_url) if settings.exa_api_key else None
    tavily = (
        TavilyClient(client, settings.tavily_api_key, settings.tavily_url)
        if settings.tavily_api_key
        else None
    )
    retrieval = TieredRetrieval(
        l1=DuckDuckGoClient(client, settings.duckduckgo_url),
        l2=exa,
        l3=tavily,
        config=TieredConfig(
            l1_threshold=settings.l1_threshold,
            l2_threshold=settings.l2_threshold,
            max_results_per_tier=settings.max_results_per_tier,
            max_attempts=settings.backend_max_attempts,
        ),
        pool=pool,
        limiters=limiters,
        cache=cache,
        pruner=ContextPruner(settings.l3_context_tokens),
    )

    logger.info(
        "Search services ready: L2=%s, L3=%s",
        "exa" if exa else "off",
        "tavily" if tavily else "off",
    )
    return SearchServices(
        pool=pool,
        limiters=limiters,
        cache=cache,
        router=router,
        retrieval=retrieval,
        searxng=SearxngClient(client, settings.searxng_url),
    )
