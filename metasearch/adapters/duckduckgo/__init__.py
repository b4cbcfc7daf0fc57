"""
DuckDuckGo Adapter - Free instant-answer search (L1).
"""

from .client import DuckDuckGoClient
from .models import DuckDuckGoResponse, DuckDuckGoTopic

__all__ = ["DuckDuckGoClient", "DuckDuckGoResponse", "DuckDuckGoTopic"]
