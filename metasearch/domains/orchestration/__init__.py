"""
Orchestration Domain - Query routing and tiered retrieval.

This domain handles:
- Query complexity classification and model selection
- Result set confidence scoring
- Confidence-gated L1 -> L2 -> L3 escalation
"""

from .confidence import DEFAULT_AUTHORITY_DOMAINS, ConfidenceCalculator
from .contracts import QueryRouter, Retriever
from .models import (
    TIER_CALL_COST,
    ConfidenceConfig,
    ModelTier,
    RetrievalTier,
    RouterConfig,
    RoutingDecision,
    SearchStrategy,
    TaskComplexity,
    TierAttempt,
    TieredConfig,
    TieredResult,
)
from .router import SemanticRouter
from .tiered import CostTracker, TieredRetrieval

__all__ = [
    # Contracts
    "QueryRouter",
    "Retriever",
    # Models
    "TaskComplexity",
    "SearchStrategy",
    "ModelTier",
    "RouterConfig",
    "RoutingDecision",
    "ConfidenceConfig",
    "RetrievalTier",
    "TIER_CALL_COST",
    "TieredConfig",
    "TierAttempt",
    "TieredResult",
    # Implementations
    "SemanticRouter",
    "ConfidenceCalculator",
    "DEFAULT_AUTHORITY_DOMAINS",
    "CostTracker",
    "TieredRetrieval",
]
