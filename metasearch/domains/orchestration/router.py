"""
Semantic Router - Query complexity classification.

Classifies a query from its shape (length, clause separators, question
marks, complexity keywords) and maps the result to a retrieval strategy
and an advisory downstream model tier.
"""

from __future__ import annotations

import logging

from .models import (
    ModelTier,
    RouterConfig,
    RoutingDecision,
    SearchStrategy,
    TaskComplexity,
)

logger = logging.getLogger(__name__)

__all__ = ["SemanticRouter"]

CLAUSE_SEPARATORS = (",", "，", "、")
QUESTION_MARKS = ("?", "？")

# Keyword + length above this is always complex
COMPLEX_KEYWORD_MIN_LENGTH = 100

STRATEGY_MAP = {
    TaskComplexity.SIMPLE: SearchStrategy.SINGLE_ENGINE,
    TaskComplexity.MEDIUM: SearchStrategy.TIERED_RETRIEVAL,
    TaskComplexity.COMPLEX: SearchStrategy.DEEP_RESEARCH,
}

MODEL_TIER_MAP = {
    TaskComplexity.SIMPLE: ModelTier.FAST,
    TaskComplexity.MEDIUM: ModelTier.BALANCED,
    TaskComplexity.COMPLEX: ModelTier.PREMIUM,
}


class SemanticRouter:
    """
    Deterministic query router.

    Example:
        >>> router = SemanticRouter()
        >>> router.classify("Rust 是什麼？")
        <TaskComplexity.SIMPLE: 'simple'>
    """

    def __init__(self, config: RouterConfig | None = None) -> None:
        self.config = config or RouterConfig()
        self._keywords = [kw.lower() for kw in self.config.complex_keywords]

    def classify(self, query: str) -> TaskComplexity:
        """Classify query complexity. First matching rule wins."""
        query_lower = query.lower()
        query_len = len(query)

        has_complex_keyword = any(kw in query_lower for kw in self._keywords)
        clause_count = sum(query.count(sep) for sep in CLAUSE_SEPARATORS) + 1
        question_count = sum(query.count(mark) for mark in QUESTION_MARKS)

        if (
            question_count > 1
            or clause_count > 2
            or (has_complex_keyword and query_len > COMPLEX_KEYWORD_MIN_LENGTH)
        ):
            return TaskComplexity.COMPLEX
        if has_complex_keyword or query_len > self.config.simple_max_length:
            return TaskComplexity.MEDIUM
        return TaskComplexity.SIMPLE

    def select_model(self, complexity: TaskComplexity) -> str:
        """Model id for the complexity's tier."""
        return self.config.model_ids[MODEL_TIER_MAP[complexity]]

    def select_model_tier(self, complexity: TaskComplexity) -> ModelTier:
        return MODEL_TIER_MAP[complexity]

    def select_search_strategy(self, complexity: TaskComplexity) -> SearchStrategy:
        return STRATEGY_MAP[complexity]

    def route(self, query: str) -> RoutingDecision:
        """Classify and bundle the advisory strategy and model."""
        complexity = self.classify(query)
        decision = RoutingDecision(
            query=query,
            complexity=complexity,
            strategy=self.select_search_strategy(complexity),
            model_tier=self.select_model_tier(complexity),
            model=self.select_model(complexity),
        )

        logger.info(
            "Routed query: complexity=%s, strategy=%s, model=%s",
            complexity.value,
            decision.strategy.value,
            decision.model,
        )

        return decision
