"""
DuckDuckGo Models - Wire format of the Instant Answer API.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from metasearch.domains.search.models import SearchResult

DEFAULT_TITLE = "DuckDuckGo Result"


class DuckDuckGoTopic(BaseModel):
    """Related topic. Topic groups nest entries under "Topics" and carry no text."""

    text: str | None = Field(default=None, alias="Text")
    first_url: str | None = Field(default=None, alias="FirstURL")

    def to_search_result(self) -> SearchResult | None:
        if not self.text:
            return None
        return SearchResult(
            title=self.text.split(" - ")[0],
            url=self.first_url or "",
            snippet=self.text,
        )


class DuckDuckGoResponse(BaseModel):
    """Raw /?format=json payload."""

    heading: str | None = Field(default=None, alias="Heading")
    abstract: str | None = Field(default=None, alias="Abstract")
    abstract_url: str | None = Field(default=None, alias="AbstractURL")
    related_topics: list[DuckDuckGoTopic] | None = Field(default=None, alias="RelatedTopics")

    def to_search_results(self, num_results: int) -> list[SearchResult]:
        """Abstract first, then related topics, up to `num_results`."""
        results: list[SearchResult] = []
        if self.abstract:
            results.append(
                SearchResult(
                    title=self.heading or DEFAULT_TITLE,
                    url=self.abstract_url or "",
                    snippet=self.abstract,
                )
            )

        for topic in self.related_topics or []:
            if len(results) >= num_results:
                break
            result = topic.to_search_result()
            if result is not None:
                results.append(result)

        return results[:num_results]
