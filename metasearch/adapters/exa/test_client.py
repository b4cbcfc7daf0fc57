"""
Tests for Exa adapter.
"""

from __future__ import annotations

import json

import httpx
import pytest

from metasearch.config.errors import ApiError, ParseError
from metasearch.domains.search.contracts import SearchBackend

from .client import ExaClient


def _exa(handler) -> ExaClient:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ExaClient(client, api_key="test-key")


async def test_search_request_and_mapping() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "results": [
                    {"title": "Tokio", "url": "https://tokio.rs", "text": "An async runtime"},
                    {"url": "https://docs.rs/tokio", "snippet": "docs"},
                ]
            },
        )

    results = await _exa(handler).search("tokio internals", 5)

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/search"
    assert request.headers["x-api-key"] == "test-key"
    body = json.loads(request.content)
    assert body["query"] == "tokio internals"
    assert body["numResults"] == 5
    assert body["contents"]["text"]["maxCharacters"] == 1000

    assert results[0].title == "Tokio"
    assert results[0].content == "An async runtime"
    assert results[0].snippet is None
    assert results[1].title == "Untitled"
    assert results[1].snippet == "docs"


async def test_unauthorized_is_api_error() -> None:
    with pytest.raises(ApiError) as exc_info:
        await _exa(lambda request: httpx.Response(401, text="invalid key")).search("q", 5)
    assert "invalid key" in exc_info.value.message


async def test_missing_results_is_parse_error() -> None:
    with pytest.raises(ParseError):
        await _exa(lambda request: httpx.Response(200, json={"error": "x"})).search("q", 5)


def test_satisfies_search_backend() -> None:
    client = ExaClient(httpx.AsyncClient(), api_key="k")
    assert isinstance(client, SearchBackend)


@pytest.mark.parametrize(
    "payload",
    [{"results": [None]}, {"results": [{"title": 5, "url": "https://x"}]}, {"results": "x"}],
)
async def test_malformed_results_are_parse_errors(payload: dict) -> None:
    with pytest.raises(ParseError) as exc_info:
        await _exa(lambda request: httpx.Response(200, json=payload)).search("q", 5)
    assert exc_info.value.details["backend"] == "exa"
