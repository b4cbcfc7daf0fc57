"""
FastAPI Main Application - Unified API entry point.

Run with: uvicorn metasearch.interfaces.api:create_app --factory --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from metasearch import __version__
from metasearch.config import get_settings

from .deps import cleanup_services
from .middleware import ErrorHandlerMiddleware, RequestContextMiddleware
from .routes import health, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting MetaSearch API...")
    logger.info("  L2 (exa): %s", "configured" if settings.exa_api_key else "off")
    logger.info("  L3 (tavily): %s", "configured" if settings.tavily_api_key else "off")
    logger.info("  SearXNG: %s", settings.searxng_url)

    yield

    logger.info("Shutting down MetaSearch API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="MetaSearch API",
        description="Confidence-gated tiered web search",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added = outermost. Errors are turned into responses before the
    # request context stamps headers and logs them.
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestContextMiddleware)

    # CORS (framework middleware)
    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]
    if settings.api_debug:
        allowed_origins.append("http://localhost:*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(search.router, prefix="/api/search", tags=["Search"])

    return app
