from __future__ import annotations

import os

# Settings are read once at import time; secrets must exist before the app loads.
os.environ["PEPPER"] = "test-pepper"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from stopwatch.core.config import get_settings
from stopwatch.core.dependencies import get_db
from stopwatch.core.security import CredentialHasher, TokenService
from stopwatch.db.base import Base
from stopwatch.main import app


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def hasher(settings) -> CredentialHasher:
    return CredentialHasher.from_settings(settings)


@pytest.fixture
def token_service(settings) -> TokenService:
    return TokenService.from_settings(settings)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def client(session_factory):
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    async def _register(name: str = "alice", password: str = "pw1"):
        return await client.post("/users/new", json={"name": name, "password": password})

    return _register


@pytest.fixture
def login_token(client, register):
    async def _login_token(name: str = "alice", password: str = "pw1") -> str:
        await register(name, password)
        response = await client.post("/users/login", json={"name": name, "password": password})
        assert response.status_code == 200
        return response.json()["token"]

    return _login_token


@pytest.fixture
def bearer():
    def _bearer(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    return _bearer
