"""
Exa Adapter - Paid precise search (L2).
"""

from .client import ExaClient
from .models import ExaResponse, ExaResult

__all__ = ["ExaClient", "ExaResponse", "ExaResult"]
