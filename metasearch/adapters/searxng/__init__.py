"""
SearXNG Adapter - Self-hosted meta-search.
"""

from .client import SearxngClient
from .models import SearxngResponse, SearxngResult

__all__ = ["SearxngClient", "SearxngResponse", "SearxngResult"]
