"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends

from metasearch import __version__
from metasearch.adapters.searxng import SearxngClient
from metasearch.interfaces.api.deps import get_searxng

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "metasearch"}


@router.get("/health/searxng")
async def searxng_health(searxng: SearxngClient = Depends(get_searxng)) -> dict[str, Any]:
    """Check that the SearXNG instance answers."""
    healthy = await searxng.health_check()
    return {
        "status": "healthy" if healthy else "unavailable",
        "searxng_url": searxng.base_url,
    }


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "MetaSearch API",
        "version": __version__,
        "description": "Confidence-gated tiered web search",
        "docs": "/docs",
    }
