"""
Orchestration Models - Data types for routing and tiered retrieval.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from metasearch.domains.search.models import SearchResult


class TaskComplexity(str, Enum):
    """Expected difficulty of a query."""

    SIMPLE = "simple"  # Fact or definition lookups
    MEDIUM = "medium"  # Comparisons, multi-step lookups
    COMPLEX = "complex"  # Deep analysis, multi-part questions


class SearchStrategy(str, Enum):
    """Retrieval strategy selected from complexity."""

    SINGLE_ENGINE = "single_engine"  # Free engine only
    TIERED_RETRIEVAL = "tiered_retrieval"  # L1 -> L2 -> L3 escalation
    DEEP_RESEARCH = "deep_research"  # All engines + content extraction


class ModelTier(str, Enum):
    """Downstream model capability tiers."""

    FAST = "fast"  # Quick responses, lower cost
    BALANCED = "balanced"  # Standard quality
    PREMIUM = "premium"  # Highest quality, higher cost


class RouterConfig(BaseModel):
    """Semantic router configuration."""

    simple_max_length: int = Field(default=50, ge=0)
    complex_keywords: list[str] = Field(
        default_factory=lambda: [
            "分析",
            "比較",
            "為什麼",
            "如何",
            "evaluate",
            "analyze",
            "compare",
        ]
    )
    model_ids: dict[ModelTier, str] = Field(
        default_factory=lambda: {
            ModelTier.FAST: "claude-haiku-4-5",
            ModelTier.BALANCED: "claude-sonnet-4-5",
            ModelTier.PREMIUM: "claude-opus-4-5",
        }
    )


class RoutingDecision(BaseModel):
    """Advisory routing output for a query."""

    query: str
    complexity: TaskComplexity
    strategy: SearchStrategy
    model_tier: ModelTier
    model: str


class ConfidenceConfig(BaseModel):
    """Weights of the five confidence sub-scores. Expected to sum to 1.0."""

    result_count_weight: float = Field(default=0.15, ge=0)
    title_relevance_weight: float = Field(default=0.30, ge=0)
    url_authority_weight: float = Field(default=0.20, ge=0)
    content_quality_weight: float = Field(default=0.20, ge=0)
    semantic_density_weight: float = Field(default=0.15, ge=0)


class RetrievalTier(str, Enum):
    """Retrieval ladder, cheapest first."""

    L1 = "L1"  # Free
    L2 = "L2"  # Paid, precise
    L3 = "L3"  # Paid, deep content extraction


# Estimated cost in USD of one call at each tier
TIER_CALL_COST: dict[RetrievalTier, float] = {
    RetrievalTier.L1: 0.0,
    RetrievalTier.L2: 0.005,
    RetrievalTier.L3: 0.010,
}


class TieredConfig(BaseModel):
    """Escalation thresholds."""

    l1_threshold: float = Field(default=0.80, ge=0.0, le=1.0)
    l2_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    max_results_per_tier: int = Field(default=10, gt=0)
    l3_max_urls: int = Field(default=3, gt=0)
    refine_max_keywords: int = Field(default=5, ge=0)
    # Backend calls per tier, counting NetworkError retries
    max_attempts: int = Field(default=3, gt=0)
    retry_wait_min: float = Field(default=0.5, ge=0)  # seconds
    retry_wait_max: float = Field(default=4.0, ge=0)  # seconds


class TierAttempt(BaseModel):
    """One tier executed during a search."""

    tier: RetrievalTier
    backend: str
    query: str
    result_count: int
    confidence: float
    calls: int = 1
    duration_ms: float = 0.0


class TieredResult(BaseModel):
    """Outcome of one tiered search."""

    query: str
    results: list[SearchResult] = Field(default_factory=list)
    tier_used: RetrievalTier
    confidence: float = Field(ge=0.0, le=1.0)
    cost_estimate: float = Field(default=0.0, ge=0.0)
    refined_query: str | None = None
    cache_hit: bool = False
    cache_error: str | None = None
    attempts: list[TierAttempt] = Field(default_factory=list)
