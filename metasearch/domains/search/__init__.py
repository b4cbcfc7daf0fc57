"""
Search Domain - Result types and backend contracts.

This domain handles:
- Query and result models shared by every backend
- The search / content-extraction capability contracts
"""

from .contracts import ContentExtractor, SearchBackend
from .models import SearchQuery, SearchResponse, SearchResult, WebResult

__all__ = [
    "SearchBackend",
    "ContentExtractor",
    "SearchQuery",
    "SearchResult",
    "WebResult",
    "SearchResponse",
]
