"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    ApiError,
    BackendError,
    CacheError,
    ErrorCode,
    MetaSearchError,
    NetworkError,
    ParseError,
    TierFailedError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "MetaSearchError",
    "BackendError",
    "NetworkError",
    "ApiError",
    "ParseError",
    "TierFailedError",
    "CacheError",
]
