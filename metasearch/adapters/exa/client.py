"""
Exa Client - Paid neural search used as the precise L2 tier.
"""

from __future__ import annotations

import logging

import httpx

from metasearch.domains.search.models import SearchResult

from ..http import parse_payload, request_json
from .models import ExaResponse

logger = logging.getLogger(__name__)

__all__ = ["ExaClient"]

# Characters of page text requested per result
TEXT_MAX_CHARACTERS = 1000


class ExaClient:
    """
    Exa search API client.

    Example:
        >>> exa = ExaClient(pool.client, api_key="...")
        >>> results = await exa.search("tokio runtime internals", 10)
    """

    name = "exa"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://api.exa.ai",
    ) -> None:
        self._client = client
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")

    async def search(self, query: str, num_results: int) -> list[SearchResult]:
        payload = {
            "query": query,
            "type": "auto",
            "numResults": num_results,
            "contents": {"text": {"maxCharacters": TEXT_MAX_CHARACTERS}},
        }
        data = await request_json(
            self._client,
            "POST",
            f"{self.base_url}/search",
            backend=self.name,
            json=payload,
            headers={"x-api-key": self._api_key},
        )

        response = parse_payload(ExaResponse, data, backend=self.name)

        results = [item.to_search_result() for item in response.results]
        logger.debug("Exa returned %d results", len(results))
        return results
