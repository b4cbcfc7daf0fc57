"""
Adapters - External service integrations.

All search backend calls are wrapped here to isolate domains from third-party changes.
"""

from .duckduckgo import DuckDuckGoClient
from .exa import ExaClient
from .searxng import SearxngClient
from .tavily import TavilyClient

__all__ = [
    # Tiered backends
    "DuckDuckGoClient",
    "ExaClient",
    "TavilyClient",
    # Meta-search
    "SearxngClient",
]
