"""Middleware tests: request ID, rate limiting, CORS, error handling."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from taskflow.middleware import rate_limit


class _FakePipeline:
    def __init__(self, counters: dict[str, int]) -> None:
        self._counters = counters
        self._ops: list[str] = []

    def incr(self, key: str) -> None:
        self._ops.append(key)

    def expire(self, key: str, seconds: int) -> None:
        pass

    async def execute(self) -> list[Any]:
        key = self._ops.pop()
        self._counters[key] = self._counters.get(key, 0) + 1
        return [self._counters[key], True]


class _FakeRedis:
    def __init__(self) -> None:
        self.counters: dict[str, int] = {}

    def pipeline(self) -> _FakePipeline:
        return _FakePipeline(self.counters)


@pytest.fixture
def fake_redis(monkeypatch: pytest.MonkeyPatch) -> _FakeRedis:
    redis = _FakeRedis()
    monkeypatch.setattr(rate_limit, "get_redis", lambda: redis)
    return redis


@pytest.mark.asyncio
async def test_request_id_generated(client: AsyncClient) -> None:
    """Request ID is auto-generated when not provided."""
    response = await client.get("/health")
    assert len(response.headers["x-request-id"]) == 36


@pytest.mark.asyncio
async def test_request_id_preserved(client: AsyncClient) -> None:
    """Custom request ID is echoed back in response."""
    response = await client.get("/health", headers={"X-Request-Id": "test-abc-123"})
    assert response.headers["x-request-id"] == "test-abc-123"


@pytest.mark.asyncio
async def test_oversized_request_id_replaced(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-Id": "x" * 500})
    assert len(response.headers["x-request-id"]) == 36


@pytest.mark.asyncio
async def test_no_rate_limit_without_redis(client: AsyncClient) -> None:
    response = await client.get("/version")
    assert response.status_code == 200
    assert "x-ratelimit-limit" not in response.headers


@pytest.mark.asyncio
async def test_rate_limit_headers(client: AsyncClient, fake_redis: _FakeRedis) -> None:
    response = await client.get("/version")
    assert response.headers["x-ratelimit-limit"] == "100"
    assert response.headers["x-ratelimit-remaining"] == "99"


@pytest.mark.asyncio
async def test_rate_limit_blocks_excess(client: AsyncClient, fake_redis: _FakeRedis) -> None:
    """101st request in a window returns 429 with Retry-After."""
    for _ in range(100):
        await client.get("/version")
    response = await client.get("/version")
    assert response.status_code == 429
    assert response.headers["retry-after"] == "60"
    assert response.json()["code"] == "RateLimited"


@pytest.mark.asyncio
async def test_health_exempt_from_rate_limit(client: AsyncClient, fake_redis: _FakeRedis) -> None:
    for _ in range(150):
        assert (await client.get("/health")).status_code == 200
    assert fake_redis.counters == {}


@pytest.mark.asyncio
async def test_cors_preflight(client: AsyncClient) -> None:
    response = await client.options(
        "/health",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "GET"},
    )
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_404_returns_json(client: AsyncClient) -> None:
    response = await client.get("/nonexistent-path")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@pytest.mark.asyncio
async def test_body_validation_is_400(client: AsyncClient, alice: dict) -> None:
    response = await client.post("/tasks", json={"title": "x", "important": "maybe"}, headers=alice["headers"])
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "ValidationError"
    assert data["details"][0]["loc"] == ["body", "important"]


@pytest_asyncio.fixture
async def failing_client(app: FastAPI, client: AsyncClient) -> AsyncGenerator[AsyncClient, None]:
    @app.get("/boom/storage")
    async def storage_failure() -> None:
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    @app.get("/boom/unhandled")
    async def unhandled_failure() -> None:
        msg = "kaboom"
        raise RuntimeError(msg)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_storage_error_returns_500(failing_client: AsyncClient) -> None:
    response = await failing_client.get("/boom/storage")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "code": "InternalError"}


@pytest.mark.asyncio
async def test_unhandled_error_returns_500(failing_client: AsyncClient) -> None:
    response = await failing_client.get("/boom/unhandled")
    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
