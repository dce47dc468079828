"""Test fixtures for the backend and the desktop client."""
import os
from pathlib import Path
from typing import AsyncIterator, Awaitable, Callable

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

test_db_path = Path("test_caja.db")

os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///./{test_db_path}")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("APP_ENV", "test")

from caja_server import models  # noqa: E402
from caja_server.database import AsyncSessionLocal, engine  # noqa: E402
from caja_server.main import app  # noqa: E402
from caja_server.services import users as users_service  # noqa: E402

BASE_URL = "http://testserver"
PASSWORD = "secret123"


@pytest_asyncio.fixture(autouse=True)
async def prepare_database() -> AsyncIterator[None]:
    """Give every test a fresh schema and drop it afterwards."""

    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.drop_all)
    await engine.dispose()
    if test_db_path.exists():
        test_db_path.unlink()


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Provide an HTTP client for integration tests."""

    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as client:
        yield client


@pytest_asyncio.fixture
async def make_user() -> Callable[..., Awaitable[models.User]]:
    """Create users straight through the service layer."""

    async def _make(email: str, password: str = PASSWORD, role: str = "USER") -> models.User:
        async with AsyncSessionLocal() as session:
            return await users_service.create_user(session, email, password, role)

    return _make


@pytest_asyncio.fixture
async def user_client(client: AsyncClient, make_user) -> AsyncClient:
    """A client already logged in (cookie jar) as a regular user."""

    await make_user("owner@example.com")
    response = await client.post(
        "/auth/login", json={"email": "owner@example.com", "password": PASSWORD}
    )
    assert response.status_code == 200
    return client


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient, make_user) -> AsyncClient:
    """A client logged in as an ADMIN."""

    await make_user("admin@example.com", role="ADMIN")
    response = await client.post(
        "/auth/login", json={"email": "admin@example.com", "password": PASSWORD}
    )
    assert response.status_code == 200
    return client
