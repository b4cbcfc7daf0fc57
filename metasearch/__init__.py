"""
MetaSearch - Confidence-gated tiered web search.

Example:
    >>> from metasearch.domains.orchestration import TieredRetrieval
    >>> engine = TieredRetrieval(l1=duckduckgo, l2=exa, l3=tavily)
    >>> result = await engine.search("rust async runtime comparison")
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
