"""
CLI Interface - Command-line tools for MetaSearch.

Provides commands for:
- Tiered search
- Query classification
- SearXNG web search
- Running the API server
"""

from .main import app, main

__all__ = ["app", "main"]
