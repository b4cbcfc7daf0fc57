"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton instances of the search services.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from metasearch.adapters.searxng import SearxngClient
from metasearch.config import get_settings
from metasearch.domains.orchestration import QueryRouter, Retriever
from metasearch.interfaces.services import SearchServices, build_services

logger = logging.getLogger(__name__)


@lru_cache
def get_services() -> SearchServices:
    """Get search services singleton."""
    return build_services(get_settings())


def get_retrieval() -> Retriever:
    return get_services().retrieval


def get_router() -> QueryRouter:
    return get_services().router


def get_searxng() -> SearxngClient:
    return get_services().searxng


async def cleanup_services() -> None:
    """Close the shared HTTP client on shutdown."""
    if get_services.cache_info().currsize:
        await get_services().aclose()
        get_services.cache_clear()
        logger.info("Search services closed")
