"""
Confidence Calculator - Scores how well a result set answers a query.

The score is a weighted sum of five sub-scores, each in [0, 1]:
result count, title relevance, URL authority, content quality and
semantic density. It is the gate for every escalation decision, so it
is deterministic and free of side effects.
"""

from __future__ import annotations

from collections.abc import Sequence

from metasearch.domains.search.models import SearchResult

from .models import ConfidenceConfig

__all__ = ["ConfidenceCalculator", "DEFAULT_AUTHORITY_DOMAINS"]

DEFAULT_AUTHORITY_DOMAINS = (
    "github.com",
    "stackoverflow.com",
    "docs.rs",
    "rust-lang.org",
    "arxiv.org",
    "wikipedia.org",
    "cve.mitre.org",
    "nvd.nist.gov",
)

# Score for queries with no significant terms
NEUTRAL_SCORE = 0.5
DENSITY_AMPLIFICATION = 10.0


def _significant_terms(query: str) -> list[str]:
    return [w for w in query.lower().split() if len(w) > 2]


class ConfidenceCalculator:
    """
    Result set confidence scorer.

    Example:
        >>> calc = ConfidenceCalculator()
        >>> calc.calculate("rust security", results)
        0.62
    """

    def __init__(
        self,
        config: ConfidenceConfig | None = None,
        authority_domains: Sequence[str] = DEFAULT_AUTHORITY_DOMAINS,
    ) -> None:
        self.config = config or ConfidenceConfig()
        self.authority_domains = tuple(authority_domains)

    def calculate(self, query: str, results: Sequence[SearchResult]) -> float:
        """Weighted confidence in [0, 1]; 0.0 for no results."""
        if not results:
            return 0.0

        cfg = self.config
        total = (
            self.score_result_count(len(results)) * cfg.result_count_weight
            + self.score_title_relevance(query, results) * cfg.title_relevance_weight
            + self.score_url_authority(results) * cfg.url_authority_weight
            + self.score_content_quality(results) * cfg.content_quality_weight
            + self.score_semantic_density(query, results) * cfg.semantic_density_weight
        )
        return min(max(total, 0.0), 1.0)

    @staticmethod
    def score_result_count(count: int) -> float:
        if count <= 0:
            return 0.0
        if count <= 2:
            return 0.3
        if count <= 5:
            return 0.6
        if count <= 10:
            return 0.9
        return 1.0

    def score_title_relevance(self, query: str, results: Sequence[SearchResult]) -> float:
        """Average fraction of query terms found in each title."""
        terms = _significant_terms(query)
        if not terms:
            return NEUTRAL_SCORE
        if not results:
            return 0.0

        total = 0.0
        for result in results:
            title = result.title.lower()
            matches = sum(1 for term in terms if term in title)
            total += matches / len(terms)

        return min(total / len(results), 1.0)

    def score_url_authority(self, results: Sequence[SearchResult]) -> float:
        """Fraction of results hosted on an allow-listed domain."""
        if not results:
            return 0.0
        authoritative = sum(
            1 for r in results if any(domain in r.url for domain in self.authority_domains)
        )
        return min(authoritative / len(results), 1.0)

    @staticmethod
    def score_content_quality(results: Sequence[SearchResult]) -> float:
        """Reward snippets, full content and long content."""
        if not results:
            return 0.0

        total = 0.0
        for result in results:
            score = 0.0
            if result.snippet is not None:
                score += 0.3
            if result.content is not None:
                score += 0.3
                if len(result.content) > 500:
                    score += 0.2
                if len(result.content) > 1000:
                    score += 0.2
            total += min(score, 1.0)

        return min(total / len(results), 1.0)

    def score_semantic_density(self, query: str, results: Sequence[SearchResult]) -> float:
        """
        Relevant-term density weighted by word diversity.

        density = (relevant_words / total_words) * (unique_words / total_words)
        """
        terms = _significant_terms(query)
        if not terms:
            return NEUTRAL_SCORE
        if not results:
            return 0.0

        total_density = 0.0
        for result in results:
            text = f"{result.title} {result.snippet or ''}".lower()
            words = text.split()
            if not words:
                continue

            relevant = sum(1 for w in words if any(term in w for term in terms))
            diversity = len(set(words)) / len(words)
            total_density += (relevant / len(words)) * diversity

        return min(total_density / len(results) * DENSITY_AMPLIFICATION, 1.0)
