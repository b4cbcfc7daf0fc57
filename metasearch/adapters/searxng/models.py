"""
SearXNG Models - Wire format of the SearXNG JSON API.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from metasearch.domains.search.models import SearchResponse, WebResult


class SearxngResult(BaseModel):
    url: str
    title: str
    content: str | None = None
    engine: str | None = None
    score: float | None = None
    category: str | None = None

    def to_web_result(self) -> WebResult:
        return WebResult(
            title=self.title,
            url=self.url,
            snippet=self.content,
            engine=self.engine or "unknown",
            score=self.score,
            category=self.category or "general",
        )


class SearxngResponse(BaseModel):
    """Raw /search?format=json payload."""

    query: str
    number_of_results: int | None = None
    results: list[SearxngResult] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    # [engine, reason] pairs
    unresponsive_engines: list[list[str]] = Field(default_factory=list)

    def to_search_response(self, elapsed_seconds: float) -> SearchResponse:
        engines = sorted({r.engine for r in self.results if r.engine})
        return SearchResponse(
            query=self.query,
            results=[r.to_web_result() for r in self.results],
            elapsed_seconds=elapsed_seconds,
            total_results=self.number_of_results,
            engines_used=engines,
        )
