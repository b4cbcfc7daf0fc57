"""
Search Models - Data types shared by backends and the retrieval engine.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchQuery(BaseModel):
    """Search request. Identity is the query text alone."""

    query: str
    num_results: int = Field(default=10, ge=1, le=100)
    category: str | None = None
    language: str | None = None
    time_range: str | None = None

    model_config = {"frozen": True}


class SearchResult(BaseModel):
    """Single search result as returned by a backend."""

    title: str
    url: str
    snippet: str | None = None
    content: str | None = None

    model_config = {"frozen": True}


class WebResult(BaseModel):
    """Meta-search engine hit with the engine that produced it."""

    title: str
    url: str
    snippet: str | None = None
    engine: str = ""
    score: float | None = None
    category: str = "general"

    def to_search_result(self) -> SearchResult:
        return SearchResult(title=self.title, url=self.url, snippet=self.snippet)


class SearchResponse(BaseModel):
    """Meta-search engine response."""

    query: str
    results: list[WebResult] = Field(default_factory=list)
    elapsed_seconds: float = 0.0
    total_results: int | None = None
    engines_used: list[str] = Field(default_factory=list)
