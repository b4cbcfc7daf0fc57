"""
Search Contracts - Interfaces every search backend implements.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .models import SearchResult


@runtime_checkable
class SearchBackend(Protocol):
    """Contract for search backends (one per retrieval tier)."""

    name: str

    async def search(self, query: str, num_results: int) -> list[SearchResult]:
        """
        Execute a search.

        Args:
            query: Query text
            num_results: Maximum number of results

        Returns:
            Ordered results

        Raises:
            NetworkError, ApiError, ParseError
        """
        ...


@runtime_checkable
class ContentExtractor(Protocol):
    """Contract for backends able to pull full page content (L3 role)."""

    name: str

    async def extract_content(self, urls: Sequence[str]) -> list[SearchResult]:
        """
        Extract full content for the given URLs.

        Args:
            urls: URLs in priority order

        Returns:
            One result per extracted page
        """
        ...
