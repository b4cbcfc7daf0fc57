"""
Tavily Client - Deep search and full-page content extraction (L3).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from metasearch.domains.search.models import SearchResult

from ..http import parse_payload, request_json
from .models import TavilyResponse, TavilyResult

logger = logging.getLogger(__name__)

__all__ = ["TavilyClient"]


class TavilyClient:
    """
    Tavily API client.

    Example:
        >>> tavily = TavilyClient(pool.client, api_key="...")
        >>> pages = await tavily.extract_content(["https://docs.rs/tokio"])
    """

    name = "tavily"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://api.tavily.com",
    ) -> None:
        self._client = client
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")

    async def search(self, query: str, num_results: int) -> list[SearchResult]:
        """Advanced search including raw page content."""
        payload = {
            "api_key": self._api_key,
            "query": query,
            "search_depth": "advanced",
            "max_results": num_results,
            "include_answer": True,
            "include_raw_content": True,
        }
        items = await self._post("/search", payload)
        return [item.to_search_result() for item in items]

    async def extract_content(self, urls: Sequence[str]) -> list[SearchResult]:
        """Extract raw page content for each URL."""
        items = await self._post("/extract", {"api_key": self._api_key, "urls": list(urls)})
        results = [item.to_search_result() for item in items]
        logger.debug("Tavily extracted %d of %d pages", len(results), len(urls))
        return results

    async def _post(self, path: str, payload: dict[str, Any]) -> list[TavilyResult]:
        data = await request_json(
            self._client,
            "POST",
            f"{self.base_url}{path}",
            backend=self.name,
            json=payload,
        )
        return parse_payload(TavilyResponse, data, backend=self.name).results
