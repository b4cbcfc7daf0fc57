"""
Tests for Tavily adapter.
"""

from __future__ import annotations

import json

import httpx
import pytest

from metasearch.config.errors import ApiError, ParseError
from metasearch.domains.search.contracts import ContentExtractor, SearchBackend

from .client import TavilyClient


def _tavily(handler) -> TavilyClient:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TavilyClient(client, api_key="tvly-key")


async def test_search_maps_content_and_raw_content() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "results": [
                    {
                        "title": "Bluetooth security",
                        "url": "https://example.com/bt",
                        "content": "summary",
                        "raw_content": "full page",
                    }
                ]
            },
        )

    results = await _tavily(handler).search("bluetooth", 3)

    body = json.loads(seen[0].content)
    assert seen[0].url.path == "/search"
    assert body["api_key"] == "tvly-key"
    assert body["search_depth"] == "advanced"
    assert body["max_results"] == 3
    assert body["include_raw_content"] is True
    assert results[0].snippet == "summary"
    assert results[0].content == "full page"


async def test_extract_content() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "results": [
                    {"url": "https://a.example", "raw_content": "<p>A</p>"},
                    {"url": "https://b.example", "raw_content": "B"},
                ],
                "failed_results": [],
            },
        )

    results = await _tavily(handler).extract_content(["https://a.example", "https://b.example"])

    assert seen[0].url.path == "/extract"
    assert json.loads(seen[0].content)["urls"] == ["https://a.example", "https://b.example"]
    assert [r.url for r in results] == ["https://a.example", "https://b.example"]
    assert results[0].content == "<p>A</p>"
    assert results[0].snippet is None


async def test_extract_error_status() -> None:
    with pytest.raises(ApiError):
        await _tavily(lambda request: httpx.Response(429, text="slow down")).extract_content(["https://a"])


async def test_extract_malformed_payload() -> None:
    with pytest.raises(ParseError):
        await _tavily(lambda request: httpx.Response(200, json={"results": "nope"})).extract_content(
            ["https://a"]
        )


def test_satisfies_contracts() -> None:
    client = TavilyClient(httpx.AsyncClient(), api_key="k")
    assert isinstance(client, SearchBackend)
    assert isinstance(client, ContentExtractor)


async def test_malformed_search_item_is_parse_error() -> None:
    payload = {"results": [{"url": "https://a", "raw_content": ["not", "text"]}]}
    with pytest.raises(ParseError):
        await _tavily(lambda request: httpx.Response(200, json=payload)).search("q", 3)


async def test_null_extract_item_is_parse_error() -> None:
    with pytest.raises(ParseError):
        await _tavily(lambda request: httpx.Response(200, json={"results": [None]})).extract_content(
            ["https://a"]
        )
