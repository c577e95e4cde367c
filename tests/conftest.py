"""Shared test fixtures.

Tests run against a throwaway SQLite file; settings are pinned through
environment variables before any application module is imported.
"""

from __future__ import annotations

import os
import tempfile
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable

_TEST_DIR = tempfile.mkdtemp(prefix="taskflow_test_")
os.environ["TASKFLOW_DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["TASKFLOW_JWT_SECRET"] = "test-secret-do-not-use-in-production"
os.environ["TASKFLOW_REDIS_URL"] = ""
os.environ["TASKFLOW_LOG_FORMAT"] = "console"
os.environ["TASKFLOW_PASSWORD_RESET_ENABLED"] = "false"
os.environ["TASKFLOW_PASSWORD_HASH_MEMORY_KIB"] = "8192"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from taskflow.config import get_settings  # noqa: E402
from taskflow.database import close_db, create_schema, get_engine, get_session, init_db  # noqa: E402
from taskflow.db.base import Base  # noqa: E402
from taskflow.main import create_app  # noqa: E402

get_settings.cache_clear()

PASSWORD = "secret1"

RegisterFn = Callable[..., Awaitable[dict]]


async def _reset_tables() -> None:
    async with get_engine().begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())


def unique_username(prefix: str = "user") -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def app() -> FastAPI:
    """Fresh application instance (own channel manager and emitter)."""
    return create_app()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client over a freshly emptied database."""
    settings = get_settings()
    await init_db(settings.database_url)
    await create_schema()
    await _reset_tables()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await close_db()


@pytest_asyncio.fixture
async def db_session(client: AsyncClient) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for test assertions."""
    async for session in get_session():
        yield session
        break


@pytest.fixture
def register(client: AsyncClient) -> RegisterFn:
    """Register a user and return ``{"token", "user", "headers"}``."""

    async def _register(username: str | None = None, password: str = PASSWORD) -> dict:
        username = username or unique_username()
        response = await client.post("/auth/register", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        data = response.json()
        return {
            "token": data["token"],
            "user": data["user"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _register


@pytest_asyncio.fixture
async def alice(register: RegisterFn) -> dict:
    return await register("alice")


@pytest_asyncio.fixture
async def bob(register: RegisterFn) -> dict:
    return await register("bob")
