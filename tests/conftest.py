"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.config import get_settings
from gamehub.database import close_db, create_all, get_session, init_db
from gamehub.main import create_app


@pytest_asyncio.fixture
async def database(tmp_path, monkeypatch) -> AsyncGenerator[str, None]:
    """Fresh SQLite database per test, schema built from the ORM models."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'gamehub.db'}"
    monkeypatch.setenv("GAMEHUB_DATABASE_URL", url)
    monkeypatch.setenv("GAMEHUB_REDIS_URL", "")
    monkeypatch.setenv("GAMEHUB_LOG_FORMAT", "console")
    monkeypatch.setenv("GAMEHUB_SPELLING_LISTS_PATH", str(tmp_path / "spelling-lists.json"))
    get_settings.cache_clear()

    await init_db(url)
    await create_all()
    yield url
    await close_db()
    get_settings.cache_clear()


@pytest_asyncio.fixture
async def client(database: str) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP test client against a freshly built app."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session(database: str) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for service-level tests and assertions."""
    sessions = get_session()
    session = await sessions.__anext__()
    yield session
    await sessions.aclose()


async def make_user(
    client: AsyncClient,
    user_id: str,
    email: str | None = None,
    username: str | None = None,
) -> dict:
    """Create a user through the API, optionally setting a username."""
    response = await client.post("/api/user", json={"userId": user_id, "email": email or f"{user_id}@example.com"})
    assert response.status_code == 200, response.text
    profile = response.json()["profile"]
    if username is not None:
        response = await client.patch("/api/user", json={"username": username}, headers={"X-User-Id": user_id})
        assert response.status_code == 200, response.text
        profile = response.json()["profile"]
    return profile


@pytest.fixture
def create_user(client: AsyncClient):
    """Factory fixture wrapping ``make_user`` for the current client."""

    async def _create(user_id: str, email: str | None = None, username: str | None = None) -> dict:
        return await make_user(client, user_id, email=email, username=username)

    return _create
