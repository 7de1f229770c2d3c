"""Pytest configuration and fixtures."""

import os

# Settings are cached on first import; configure before importing the app
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DISABLE_AUTH"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import AsyncGenerator  # noqa: E402
from dataclasses import dataclass  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from studyhub.config import get_settings  # noqa: E402
from studyhub.db import models  # noqa: E402, F401
from studyhub.db.base import Base  # noqa: E402
from studyhub.db.session import get_db  # noqa: E402
from studyhub.main import app  # noqa: E402
from studyhub.services.security import pwd_context  # noqa: E402

# Cheap hashes keep registration-heavy tests fast
pwd_context.update(bcrypt_sha256__rounds=4, bcrypt__rounds=4)


@dataclass
class RegisteredUser:
    id: UUID
    email: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def settings():
    """The cached Settings instance; patch attributes with monkeypatch."""
    return get_settings()


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=db_engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for calling services directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints against the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    # Unhandled errors come back as 500 responses instead of raising in the test
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def register(client: AsyncClient, name: str, email: str, password: str = "secret123") -> RegisteredUser:
    response = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return RegisteredUser(id=UUID(body["user"]["id"]), email=email, token=body["token"])


@pytest.fixture
async def alice(client: AsyncClient) -> RegisteredUser:
    return await register(client, "Alice", "alice@example.com")


@pytest.fixture
async def bob(client: AsyncClient) -> RegisteredUser:
    return await register(client, "Bob", "bob@example.com")


@pytest.fixture
def register_user(client: AsyncClient):
    """Factory: await register_user("Carol", "carol@example.com")."""

    async def _register(name: str, email: str, password: str = "secret123") -> RegisteredUser:
        return await register(client, name, email, password)

    return _register
