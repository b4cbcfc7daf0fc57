"""
HTTP helpers shared by the search adapters.

Maps httpx failures and malformed payloads onto the backend error taxonomy
so callers only ever see NetworkError, ApiError or ParseError. Retries are
left to the caller, which owns rate limiting and cost accounting.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from metasearch.config.errors import ApiError, NetworkError, ParseError

logger = logging.getLogger(__name__)

__all__ = ["parse_payload", "request_json"]

# Response bodies quoted in error messages are cut to this length
ERROR_BODY_CHARS = 200

M = TypeVar("M", bound=BaseModel)


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    backend: str,
    **kwargs: Any,
) -> Any:
    """
    Send a request and decode the JSON body.

    Args:
        client: Shared HTTP client
        method: HTTP method
        url: Absolute URL
        backend: Backend name for error details
        **kwargs: Passed to httpx (params, json, headers)

    Returns:
        Decoded JSON payload

    Raises:
        NetworkError: Connect/read failure or timeout
        ApiError: Non-2xx status
        ParseError: Body is not JSON
    """
    details = {"backend": backend, "url": url}
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TransportError as e:
        logger.warning("%s request failed: %s", backend, e)
        raise NetworkError(f"{backend} request failed: {e}", details) from e

    if response.is_error:
        body = response.text[:ERROR_BODY_CHARS]
        raise ApiError(
            f"{backend} HTTP {response.status_code}: {body}",
            {**details, "status_code": response.status_code},
        )

    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"{backend} returned invalid JSON: {e}", details) from e


def parse_payload(model: type[M], data: Any, *, backend: str) -> M:
    """
    Validate a decoded payload against a wire model.

    Raises:
        ParseError: Payload does not have the expected shape
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        raise ParseError(
            f"{backend} response invalid: {e.error_count()} validation error(s)",
            {"backend": backend, "errors": errors},
        ) from e
