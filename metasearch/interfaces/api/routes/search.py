"""
Search Routes - Tiered search, web search and query classification.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from metasearch.adapters.searxng import SearxngClient
from metasearch.config.errors import ErrorCode, MetaSearchError
from metasearch.domains.orchestration import (
    QueryRouter,
    RetrievalTier,
    Retriever,
    RoutingDecision,
    TierAttempt,
)
from metasearch.domains.search import SearchQuery, SearchResponse, SearchResult
from metasearch.interfaces.api.deps import get_retrieval, get_router, get_searxng
from metasearch.interfaces.api.middleware import COST_HEADER, TIER_HEADER

logger = logging.getLogger(__name__)

router = APIRouter()


class SearchRequest(BaseModel):
    """Tiered search request body."""

    query: str = Field(..., min_length=1, description="Search query")
    limit: int = Field(default=10, ge=1, le=100)


class TieredSearchResponse(BaseModel):
    """Tiered search response."""

    query: str
    results: list[SearchResult]
    total: int
    tier_used: RetrievalTier
    confidence: float
    cost_estimate: float
    refined_query: str | None = None
    cache_hit: bool = False
    cache_error: str | None = None
    attempts: list[TierAttempt] = Field(default_factory=list)
    routing: RoutingDecision


class WebSearchRequest(BaseModel):
    """SearXNG search request body."""

    query: str = Field(..., min_length=1, description="Search query")
    limit: int = Field(default=10, ge=1, le=100)
    category: str | None = None
    language: str | None = None
    time_range: str | None = Field(default=None, description="day, week, month or year")


class ClassifyRequest(BaseModel):
    query: str = Field(..., min_length=1)


def _require_text(query: str) -> str:
    text = query.strip()
    if not text:
        raise MetaSearchError(ErrorCode.SEARCH_INVALID_QUERY, "Query must not be blank")
    return text


@router.post("", response_model=TieredSearchResponse)
async def search(
    request: SearchRequest,
    response: Response,
    retrieval: Retriever = Depends(get_retrieval),
    query_router: QueryRouter = Depends(get_router),
):
    """
    Run a confidence-gated tiered search.

    - **query**: Search query text
    - **limit**: Maximum results returned (1-100)

    The routing decision is advisory and returned alongside the results.
    """
    query = _require_text(request.query)
    decision = query_router.route(query)
    result = await retrieval.search(query)
    response.headers[TIER_HEADER] = result.tier_used.value
    response.headers[COST_HEADER] = f"{result.cost_estimate:.4f}"

    results = result.results[: request.limit]
    return TieredSearchResponse(
        query=query,
        results=results,
        total=len(results),
        tier_used=result.tier_used,
        confidence=result.confidence,
        cost_estimate=result.cost_estimate,
        refined_query=result.refined_query,
        cache_hit=result.cache_hit,
        cache_error=result.cache_error,
        attempts=result.attempts,
        routing=decision,
    )


@router.post("/web", response_model=SearchResponse)
async def web_search(
    request: WebSearchRequest,
    searxng: SearxngClient = Depends(get_searxng),
):
    """Search through the SearXNG meta-search instance."""
    query = SearchQuery(
        query=_require_text(request.query),
        num_results=request.limit,
        category=request.category,
        language=request.language,
        time_range=request.time_range,
    )
    return await searxng.search(query)


@router.post("/classify", response_model=RoutingDecision)
async def classify(
    request: ClassifyRequest,
    query_router: QueryRouter = Depends(get_router),
):
    """Classify a query and return the advisory strategy and model."""
    return query_router.route(request.query)
