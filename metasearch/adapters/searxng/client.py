"""
SearXNG Client - Self-hosted meta-search engine.

Queries a SearXNG instance's JSON API and reports which upstream engines
answered. Used for direct web search outside the tiered ladder.
"""

from __future__ import annotations

import logging
import time

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from metasearch.config.errors import NetworkError
from metasearch.domains.search.models import SearchQuery, SearchResponse

from ..http import parse_payload, request_json
from .models import SearxngResponse

logger = logging.getLogger(__name__)

__all__ = ["SearxngClient"]


class SearxngClient:
    """
    SearXNG JSON API client.

    Example:
        >>> searxng = SearxngClient(pool.client, "http://localhost:8080")
        >>> response = await searxng.search(SearchQuery(query="linux kernel", category="it"))
        >>> response.engines_used
        ['brave', 'google']
    """

    name = "searxng"

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = "http://localhost:8080",
    ) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")

    # Direct searches bypass the tiered engine, so retry here
    @retry(
        retry=retry_if_exception_type(NetworkError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        reraise=True,
    )
    async def search(self, query: SearchQuery) -> SearchResponse:
        """
        Run a search.

        Args:
            query: Query with optional category, language and time range

        Returns:
            Results with engines used and elapsed time

        Raises:
            NetworkError, ApiError, ParseError
        """
        params: dict[str, str | int] = {
            "q": query.query,
            "format": "json",
            "number_of_results": query.num_results,
        }
        if query.category:
            params["categories"] = query.category
        if query.language:
            params["language"] = query.language
        if query.time_range:
            params["time_range"] = query.time_range

        logger.info("SearXNG search: %s", query.query)
        start = time.perf_counter()
        data = await request_json(
            self._client, "GET", f"{self.base_url}/search", backend=self.name, params=params
        )

        raw = parse_payload(SearxngResponse, data, backend=self.name)

        elapsed = time.perf_counter() - start
        if raw.unresponsive_engines:
            logger.warning(
                "Unresponsive engines: %s",
                ", ".join(pair[0] for pair in raw.unresponsive_engines if pair),
            )

        response = raw.to_search_response(elapsed)
        logger.info(
            "Search complete: %d results in %.0fms",
            len(response.results),
            elapsed * 1000,
        )
        return response

    async def health_check(self) -> bool:
        """True if the instance answers a trivial search."""
        try:
            response = await self._client.get(
                f"{self.base_url}/search",
                params={"q": "test", "format": "json", "number_of_results": 1},
            )
        except httpx.HTTPError as e:
            logger.debug("SearXNG health check failed: %s", e)
            return False
        return response.is_success
