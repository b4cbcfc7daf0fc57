"""Tests for API Routes."""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from metasearch.config.errors import (
    ApiError,
    MetaSearchError,
    NetworkError,
    ParseError,
    TierFailedError,
)
from metasearch.domains.orchestration import RetrievalTier, SemanticRouter, TieredResult
from metasearch.domains.search import SearchResponse, SearchResult, WebResult

from .deps import get_retrieval, get_router, get_searxng
from .main import create_app
from .middleware import error_status


@pytest.fixture
def mock_retrieval() -> MagicMock:
    """Create a mock tiered retrieval engine."""
    mock = MagicMock()
    mock.search = AsyncMock(
        return_value=TieredResult(
            query="rust security",
            results=[
                SearchResult(title=f"Result {i}", url=f"https://github.com/r/{i}", snippet="s")
                for i in range(5)
            ],
            tier_used=RetrievalTier.L1,
            confidence=0.82,
            cost_estimate=0.0,
        )
    )
    return mock


@pytest.fixture
def mock_searxng() -> MagicMock:
    """Create a mock SearXNG client."""
    mock = MagicMock()
    mock.base_url = "http://searxng.test"
    mock.health_check = AsyncMock(return_value=True)
    mock.search = AsyncMock(
        return_value=SearchResponse(
            query="linux kernel",
            results=[WebResult(title="Linux Kernel", url="https://kernel.org", engine="brave")],
            elapsed_seconds=0.2,
            total_results=1,
            engines_used=["brave"],
        )
    )
    return mock


@pytest.fixture
def client(
    mock_retrieval: MagicMock, mock_searxng: MagicMock
) -> Generator[TestClient, None, None]:
    """Create a test client with mocked dependencies."""
    app = create_app()

    app.dependency_overrides[get_retrieval] = lambda: mock_retrieval
    app.dependency_overrides[get_searxng] = lambda: mock_searxng
    app.dependency_overrides[get_router] = lambda: SemanticRouter()

    yield TestClient(app)

    app.dependency_overrides.clear()


def test_health_endpoint(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "metasearch"


def test_request_id_echoed(client: TestClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert "X-Response-Time-Ms" in response.headers


def test_searxng_health(client: TestClient, mock_searxng: MagicMock) -> None:
    response = client.get("/health/searxng")
    assert response.json() == {"status": "healthy", "searxng_url": "http://searxng.test"}

    mock_searxng.health_check.return_value = False
    response = client.get("/health/searxng")
    assert response.json()["status"] == "unavailable"


def test_api_info(client: TestClient) -> None:
    data = client.get("/api").json()
    assert data["name"] == "MetaSearch API"


def test_tiered_search(client: TestClient, mock_retrieval: MagicMock) -> None:
    response = client.post("/api/search", json={"query": "rust security", "limit": 3})
    assert response.status_code == 200

    data = response.json()
    assert data["tier_used"] == "L1"
    assert data["confidence"] == 0.82
    assert data["cost_estimate"] == 0.0
    assert data["total"] == 3
    assert len(data["results"]) == 3
    assert data["routing"]["complexity"] == "simple"
    mock_retrieval.search.assert_awaited_once_with("rust security")
    assert response.headers["X-Search-Tier"] == "L1"
    assert response.headers["X-Search-Cost"] == "0.0000"


def test_search_empty_query_rejected(client: TestClient) -> None:
    response = client.post("/api/search", json={"query": ""})
    assert response.status_code == 422


def test_search_blank_query_rejected(client: TestClient, mock_retrieval: MagicMock) -> None:
    response = client.post("/api/search", json={"query": "   "})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "SEARCH_INVALID_QUERY"
    mock_retrieval.search.assert_not_awaited()


def test_tier_failure_maps_to_bad_gateway(client: TestClient, mock_retrieval: MagicMock) -> None:
    mock_retrieval.search.side_effect = TierFailedError("L2", "exa", ApiError("HTTP 401"))

    response = client.post("/api/search", json={"query": "rust security"})

    assert response.status_code == 502
    error = response.json()["error"]
    assert error["code"] == "TIER_FAILED"
    assert error["details"]["tier"] == "L2"
    assert error["details"]["backend"] == "exa"
    assert response.headers["X-Search-Tier"] == "L2"


def test_unreachable_backend_maps_to_gateway_timeout(
    client: TestClient, mock_retrieval: MagicMock
) -> None:
    mock_retrieval.search.side_effect = TierFailedError(
        "L1", "duckduckgo", NetworkError("timed out")
    )

    response = client.post(
        "/api/search", json={"query": "rust security"}, headers={"X-Request-ID": "r-1"}
    )

    assert response.status_code == 504
    body = response.json()
    assert body["request_id"] == "r-1"
    assert body["error"]["details"] == {
        "tier": "L1",
        "backend": "duckduckgo",
        "cause": "BACKEND_NETWORK_ERROR",
    }
    assert response.headers["X-Search-Tier"] == "L1"


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (TierFailedError("L2", "exa", ApiError("HTTP 500")), 502),
        (TierFailedError("L3", "tavily", ParseError("bad payload")), 502),
        (TierFailedError("L1", "duckduckgo", NetworkError("refused")), 504),
        (ParseError("bad payload"), 502),
        (NetworkError("refused"), 504),
    ],
)
def test_error_status(error: MetaSearchError, status: int) -> None:
    assert error_status(error) == status


def test_web_search(client: TestClient, mock_searxng: MagicMock) -> None:
    response = client.post(
        "/api/search/web",
        json={"query": "linux kernel", "category": "it", "time_range": "month"},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["engines_used"] == ["brave"]
    assert data["results"][0]["title"] == "Linux Kernel"
    query = mock_searxng.search.await_args.args[0]
    assert query.category == "it"
    assert query.time_range == "month"


def test_classify(client: TestClient) -> None:
    query = "分析 Bose 藍牙協議的安全性，找出潛在漏洞，並提出改進方案？"
    response = client.post("/api/search/classify", json={"query": query})
    assert response.status_code == 200

    data = response.json()
    assert data["complexity"] == "complex"
    assert data["strategy"] == "deep_research"
    assert data["model_tier"] == "premium"
