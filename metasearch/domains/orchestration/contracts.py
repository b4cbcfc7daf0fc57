"""
Orchestration Contracts - Interfaces for orchestration domain.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import RoutingDecision, TaskComplexity, TieredResult


@runtime_checkable
class QueryRouter(Protocol):
    """Contract for query routing."""

    def classify(self, query: str) -> TaskComplexity:
        """
        Classify query complexity.

        Args:
            query: Query text

        Returns:
            Complexity class
        """
        ...

    def route(self, query: str) -> RoutingDecision:
        """
        Determine strategy and model for a query.

        Args:
            query: Query text

        Returns:
            Routing decision (advisory)
        """
        ...


@runtime_checkable
class Retriever(Protocol):
    """Contract for confidence-gated retrieval."""

    async def search(self, query: str) -> TieredResult:
        """
        Retrieve results for a query.

        Args:
            query: Query text

        Returns:
            Results with the tier used, confidence and cost estimate

        Raises:
            TierFailedError: A backend call failed
        """
        ...
