"""
API Middleware - Request tracing and error mapping.

Every response carries X-Request-ID and X-Response-Time-Ms. Routes that run
a tiered search report the answering tier and its spend in X-Search-Tier
and X-Search-Cost, which the access log line picks up.

Domain errors become `{"error": ..., "request_id": ...}` bodies. A failed
tier is mapped by its cause: an unreachable backend is a gateway timeout,
a backend that answered badly is a bad gateway.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from metasearch.config.errors import ErrorCode, MetaSearchError, TierFailedError

logger = logging.getLogger(__name__)

__all__ = [
    "COST_HEADER",
    "TIER_HEADER",
    "ErrorHandlerMiddleware",
    "RequestContextMiddleware",
    "error_status",
]

TIER_HEADER = "X-Search-Tier"
COST_HEADER = "X-Search-Cost"

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.SEARCH_INVALID_QUERY: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.BACKEND_API_ERROR: 502,
    ErrorCode.BACKEND_PARSE_ERROR: 502,
    ErrorCode.TIER_FAILED: 502,
    ErrorCode.BACKEND_NETWORK_ERROR: 504,
}


def error_status(error: MetaSearchError) -> int:
    """HTTP status for a domain error; tier failures take their cause's status."""
    if isinstance(error, TierFailedError):
        return ERROR_STATUS.get(error.cause.code, 502)
    return ERROR_STATUS.get(error.code, 500)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request ID, time the request and write the access log line."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"

        tier = response.headers.get(TIER_HEADER)
        if tier:
            logger.info(
                "%s %s status=%d latency_ms=%.2f tier=%s cost=%s request_id=%s",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                tier,
                response.headers.get(COST_HEADER, "0"),
                request_id,
            )
        else:
            logger.info(
                "%s %s status=%d latency_ms=%.2f request_id=%s",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                request_id,
            )
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Convert MetaSearchError exceptions to structured JSON responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except MetaSearchError as e:
            request_id = getattr(request.state, "request_id", "unknown")
            status = error_status(e)
            headers: dict[str, str] = {}

            if isinstance(e, TierFailedError):
                headers[TIER_HEADER] = e.tier
                logger.warning(
                    "%s (%s) failed with %s: %s request_id=%s",
                    e.tier,
                    e.backend,
                    e.cause.code.value,
                    e.cause.message,
                    request_id,
                )
            elif status < 500:
                logger.info("Rejected request: %s request_id=%s", e.message, request_id)
            else:
                logger.error(
                    "%s: %s request_id=%s details=%s",
                    e.code.value,
                    e.message,
                    request_id,
                    e.details,
                )

            return JSONResponse(
                status_code=status,
                content={"error": e.to_dict(), "request_id": request_id},
                headers=headers,
            )
        except Exception as e:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.exception("Unhandled error: %s request_id=%s", e, request_id)
            return JSONResponse(
                status_code=500,
                content={
                    "error": {
                        "code": ErrorCode.INTERNAL_ERROR.value,
                        "message": "Internal server error",
                        "details": {},
                    },
                    "request_id": request_id,
                },
            )
