"""
Exa Models - Wire format of the /search endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel

from metasearch.domains.search.models import SearchResult


class ExaResult(BaseModel):
    title: str | None = None
    url: str | None = None
    snippet: str | None = None
    text: str | None = None

    def to_search_result(self) -> SearchResult:
        return SearchResult(
            title=self.title or "Untitled",
            url=self.url or "",
            snippet=self.snippet,
            content=self.text,
        )


class ExaResponse(BaseModel):
    results: list[ExaResult]
