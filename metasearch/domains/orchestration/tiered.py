"""
Tiered Retrieval - Confidence-gated escalation across search backends.

Runs the free L1 backend first and only escalates to the paid L2 search
and L3 content extraction while the confidence of the previous tier is
strictly below its threshold. Every backend call is admitted through the
shared connection pool and that backend's rate limiter. Network errors
are retried here rather than in the adapters, so every retry is also
rate limited and charged.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Awaitable, Callable, Sequence

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from metasearch.config.errors import BackendError, CacheError, NetworkError, TierFailedError
from metasearch.domains.processing import ContextPruner, HtmlCleaner
from metasearch.domains.resources import ConnectionPool, RateLimiterRegistry, ResultCache
from metasearch.domains.search.contracts import ContentExtractor, SearchBackend
from metasearch.domains.search.models import SearchResult

from .confidence import ConfidenceCalculator
from .models import (
    TIER_CALL_COST,
    RetrievalTier,
    TierAttempt,
    TieredConfig,
    TieredResult,
)

logger = logging.getLogger(__name__)

__all__ = ["CostTracker", "TieredRetrieval"]


class CostTracker:
    """Running totals of paid backend calls, shared across searches."""

    def __init__(self) -> None:
        self._calls: dict[RetrievalTier, int] = {tier: 0 for tier in RetrievalTier}
        self._lock = threading.Lock()

    def record(self, tier: RetrievalTier) -> None:
        with self._lock:
            self._calls[tier] += 1

    def calls(self, tier: RetrievalTier) -> int:
        with self._lock:
            return self._calls[tier]

    @property
    def total_cost(self) -> float:
        with self._lock:
            return sum(TIER_CALL_COST[tier] * n for tier, n in self._calls.items())


class TieredRetrieval:
    """
    L1 -> L2 -> L3 retrieval engine.

    Example:
        >>> engine = TieredRetrieval(l1=duckduckgo, l2=exa, l3=tavily)
        >>> result = await engine.search("rust async runtime comparison")
        >>> result.tier_used, result.confidence, result.cost_estimate
        (<RetrievalTier.L2: 'L2'>, 0.87, 0.005)
    """

    def __init__(
        self,
        l1: SearchBackend,
        l2: SearchBackend | None = None,
        l3: ContentExtractor | None = None,
        config: TieredConfig | None = None,
        calculator: ConfidenceCalculator | None = None,
        pool: ConnectionPool | None = None,
        limiters: RateLimiterRegistry | None = None,
        cache: ResultCache | None = None,
        cost_tracker: CostTracker | None = None,
        pruner: ContextPruner | None = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            l1: Free search backend (required)
            l2: Paid search backend, tried when L1 confidence is too low
            l3: Content extractor, fed the top L2 URLs
            config: Escalation thresholds
            calculator: Confidence scorer
            pool: Shared connection pool
            limiters: Per-backend rate limiters
            cache: Result cache; no caching if None
            cost_tracker: Shared paid-call accounting
            pruner: Token budget for cleaned L3 page content
        """
        self.l1 = l1
        self.l2 = l2
        self.l3 = l3
        self.config = config or TieredConfig()
        self.calculator = calculator or ConfidenceCalculator()
        self.pool = pool or ConnectionPool()
        self.limiters = limiters or RateLimiterRegistry()
        self.cache = cache
        self.costs = cost_tracker or CostTracker()
        self.pruner = pruner

    async def search(self, query: str) -> TieredResult:
        """
        Run a tiered search.

        Args:
            query: Query text

        Returns:
            Results of the last tier executed

        Raises:
            TierFailedError: A backend failed; no partial result is returned
        """
        cached = self._from_cache(query)
        if cached is not None:
            return cached

        attempts: list[TierAttempt] = []
        cost = 0.0

        l1_results, l1_confidence = await self._run_tier(
            RetrievalTier.L1, self.l1.name, query, query, attempts,
            lambda: self.l1.search(query, self.config.max_results_per_tier),
        )
        if l1_confidence >= self.config.l1_threshold or self.l2 is None:
            return self._finish(query, l1_results, RetrievalTier.L1, l1_confidence, cost, attempts)

        l2 = self.l2
        refined = self.refine_query(query, l1_results)
        l2_results, l2_confidence = await self._run_tier(
            RetrievalTier.L2, l2.name, query, refined, attempts,
            lambda: l2.search(refined, self.config.max_results_per_tier),
        )
        cost += TIER_CALL_COST[RetrievalTier.L2] * attempts[-1].calls

        urls = [r.url for r in l2_results[: self.config.l3_max_urls]]
        if l2_confidence >= self.config.l2_threshold or self.l3 is None or not urls:
            return self._finish(
                query, l2_results, RetrievalTier.L2, l2_confidence, cost, attempts, refined
            )

        l3 = self.l3
        l3_results, l3_confidence = await self._run_tier(
            RetrievalTier.L3, l3.name, query, refined, attempts,
            lambda: l3.extract_content(urls),
        )
        cost += TIER_CALL_COST[RetrievalTier.L3] * attempts[-1].calls

        return self._finish(
            query, l3_results, RetrievalTier.L3, l3_confidence, cost, attempts, refined
        )

    def refine_query(self, original: str, results: Sequence[SearchResult]) -> str:
        """Append distinct long words from L1 snippets to the query."""
        keywords: list[str] = []
        for result in results:
            if not result.snippet:
                continue
            for word in result.snippet.split():
                if len(keywords) >= self.config.refine_max_keywords:
                    break
                if len(word) > 3 and word not in keywords:
                    keywords.append(word)

        if not keywords:
            return original
        return f"{original} {' '.join(keywords)}"

    async def _run_tier(
        self,
        tier: RetrievalTier,
        backend: str,
        query: str,
        sent_query: str,
        attempts: list[TierAttempt],
        call: Callable[[], Awaitable[list[SearchResult]]],
    ) -> tuple[list[SearchResult], float]:
        """
        Execute one tier under a pool permit, then score it.

        Network failures are retried up to `max_attempts` calls. Each call
        takes its own rate token and is charged on its own.
        """
        logger.info("%s: searching with %s", tier.value, backend)
        start = time.perf_counter()
        limiter = self.limiters.get(backend)
        calls = 0

        async def call_once() -> list[SearchResult]:
            nonlocal calls
            await limiter.acquire()
            calls += 1
            try:
                return await call()
            finally:
                if TIER_CALL_COST[tier] > 0:
                    self.costs.record(tier)

        async with self.pool.permit():
            try:
                results = await self._retrying(tier, backend)(call_once)
            except BackendError as e:
                logger.warning("%s (%s) failed: %s", tier.value, backend, e.message)
                raise TierFailedError(tier.value, backend, e) from e

        if tier is RetrievalTier.L3:
            results = [self._prepare_page(r) for r in results]

        confidence = self.calculator.calculate(query, results)
        attempts.append(
            TierAttempt(
                tier=tier,
                backend=backend,
                query=sent_query,
                result_count=len(results),
                confidence=confidence,
                calls=calls,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        )
        logger.info("%s confidence: %.2f (%d results)", tier.value, confidence, len(results))
        return results, confidence

    def _retrying(self, tier: RetrievalTier, backend: str) -> AsyncRetrying:
        def log_retry(state: RetryCallState) -> None:
            logger.warning(
                "%s (%s) network error, retrying (attempt %d of %d)",
                tier.value, backend, state.attempt_number, self.config.max_attempts,
            )

        return AsyncRetrying(
            retry=retry_if_exception_type(NetworkError),
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(
                multiplier=0.5, min=self.config.retry_wait_min, max=self.config.retry_wait_max
            ),
            before_sleep=log_retry,
            reraise=True,
        )

    def _prepare_page(self, result: SearchResult) -> SearchResult:
        """Strip markup from extracted content and fit it to the token budget."""
        if not result.content:
            return result
        content = HtmlCleaner.clean(result.content)
        if self.pruner is not None:
            content = self.pruner.prune(content)
        return result.model_copy(update={"content": content})

    def _from_cache(self, query: str) -> TieredResult | None:
        if self.cache is None:
            return None

        batch = self.cache.get(query)
        if batch is None:
            return None

        results = batch.to_search_results()
        tier = RetrievalTier(batch.tier) if batch.tier else RetrievalTier.L1
        return TieredResult(
            query=query,
            results=results,
            tier_used=tier,
            confidence=self.calculator.calculate(query, results),
            cost_estimate=0.0,
            cache_hit=True,
        )

    def _finish(
        self,
        query: str,
        results: list[SearchResult],
        tier: RetrievalTier,
        confidence: float,
        cost: float,
        attempts: list[TierAttempt],
        refined: str | None = None,
    ) -> TieredResult:
        cache_error = None
        if self.cache is not None:
            try:
                self.cache.store(query, results, tier=tier.value)
                logger.info("Cached %d results from %s", len(results), tier.value)
            except CacheError as e:
                logger.warning("Cache write failed: %s", e.message)
                cache_error = e.message

        return TieredResult(
            query=query,
            results=results,
            tier_used=tier,
            confidence=confidence,
            cost_estimate=cost,
            refined_query=refined,
            cache_error=cache_error,
            attempts=attempts,
        )

