"""
Tavily Adapter - Deep search and content extraction (L3).
"""

from .client import TavilyClient
from .models import TavilyResponse, TavilyResult

__all__ = ["TavilyClient", "TavilyResponse", "TavilyResult"]
