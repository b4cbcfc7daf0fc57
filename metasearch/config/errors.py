"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from metasearch.config.errors import ErrorCode, MetaSearchError

    raise MetaSearchError(ErrorCode.BACKEND_API_ERROR, "Exa returned 401")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error responses."""

    # Backend errors
    BACKEND_NETWORK_ERROR = "BACKEND_NETWORK_ERROR"
    BACKEND_API_ERROR = "BACKEND_API_ERROR"
    BACKEND_PARSE_ERROR = "BACKEND_PARSE_ERROR"

    # Retrieval errors
    TIER_FAILED = "TIER_FAILED"
    SEARCH_INVALID_QUERY = "SEARCH_INVALID_QUERY"

    # Cache errors
    CACHE_WRITE_FAILED = "CACHE_WRITE_FAILED"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class MetaSearchError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to API-friendly dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class BackendError(MetaSearchError):
    """Failure talking to a search backend."""


class NetworkError(BackendError):
    """Transport failure (connect, read, timeout) reaching a backend."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.BACKEND_NETWORK_ERROR, message, details)


class ApiError(BackendError):
    """Backend reachable but answered with a non-success status or error payload."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.BACKEND_API_ERROR, message, details)


class ParseError(BackendError):
    """Backend response could not be decoded into the expected shape."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.BACKEND_PARSE_ERROR, message, details)


class TierFailedError(MetaSearchError):
    """A retrieval tier's backend call failed; aborts the tiered search."""

    def __init__(self, tier: str, backend: str, cause: BackendError) -> None:
        self.tier = tier
        self.backend = backend
        self.cause = cause
        super().__init__(
            ErrorCode.TIER_FAILED,
            f"{tier} ({backend}) failed: {cause.message}",
            {"tier": tier, "backend": backend, "cause": cause.code.value},
        )


class CacheError(MetaSearchError):
    """Result cache write errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CACHE_WRITE_FAILED, message, details)
