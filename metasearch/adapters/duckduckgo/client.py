"""
DuckDuckGo Client - Free L1 search via the Instant Answer API.
"""

from __future__ import annotations

import logging

import httpx

from metasearch.domains.search.models import SearchResult

from ..http import parse_payload, request_json
from .models import DuckDuckGoResponse

logger = logging.getLogger(__name__)

__all__ = ["DuckDuckGoClient"]


class DuckDuckGoClient:
    """
    DuckDuckGo Instant Answer client.

    Returns the abstract (if any) followed by related topics.

    Example:
        >>> ddg = DuckDuckGoClient(pool.client)
        >>> results = await ddg.search("rust language", 10)
    """

    name = "duckduckgo"

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = "https://api.duckduckgo.com",
    ) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")

    async def search(self, query: str, num_results: int) -> list[SearchResult]:
        data = await request_json(
            self._client,
            "GET",
            f"{self.base_url}/",
            backend=self.name,
            params={"q": query, "format": "json", "no_html": 1},
        )
        answer = parse_payload(DuckDuckGoResponse, data, backend=self.name)

        results = answer.to_search_results(num_results)
        logger.debug("DuckDuckGo returned %d results", len(results))
        return results
