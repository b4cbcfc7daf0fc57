"""
Tavily Models - Wire format of the /search and /extract endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel

from metasearch.domains.search.models import SearchResult


class TavilyResult(BaseModel):
    """One /search hit or /extract page; /extract omits title and content."""

    title: str | None = None
    url: str | None = None
    content: str | None = None
    raw_content: str | None = None

    def to_search_result(self) -> SearchResult:
        return SearchResult(
            title=self.title or "Untitled",
            url=self.url or "",
            snippet=self.content,
            content=self.raw_content,
        )


class TavilyResponse(BaseModel):
    results: list[TavilyResult]
