"""
Pytest fixtures for the user management API tests.

Tests run against a temporary SQLite file so the app's engine and the
fixtures share one database. Environment is set before any src import.
"""

import os
import tempfile
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

_tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
_tmp.close()
TEST_DB_PATH = _tmp.name

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret"
os.environ["JWT_ACCESS_EXPIRATION"] = "15m"
os.environ["JWT_REFRESH_EXPIRATION"] = "7d"
os.environ["API_PREFIX"] = "/api"

from src.config import get_settings  # noqa: E402

get_settings.cache_clear()

from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from src.database import async_session_maker, engine  # noqa: E402
from src.kernel.identity.jwt import JWTManager, get_jwt_manager  # noqa: E402
from src.kernel.identity.password import hash_password  # noqa: E402
from src.kernel.models import Base, User  # noqa: E402

API = "/api"
TEST_PASSWORD = "TestPassword123"


def pytest_sessionfinish(session, exitstatus):
    """Clean up temp DB file after test run."""
    for suffix in ("", "-wal", "-shm"):
        path = TEST_DB_PATH + suffix
        if os.path.exists(path):
            os.unlink(path)


@pytest_asyncio.fixture
async def db_schema() -> AsyncGenerator[None, None]:
    """Fresh tables for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session(db_schema) -> AsyncGenerator[AsyncSession, None]:
    """A session on the test database."""
    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_schema) -> AsyncGenerator[AsyncClient, None]:
    """Async client talking to the app in-process."""
    from src.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A committed user with password TEST_PASSWORD."""
    user = User(
        email="testuser@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        first_name="Test",
        last_name="User",
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def jwt_manager() -> JWTManager:
    """The JWT manager the app uses."""
    return get_jwt_manager()


@pytest.fixture
def auth_headers(test_user: User, jwt_manager: JWTManager) -> dict:
    """Authorization header for test_user."""
    token, _ = jwt_manager.create_access_token(
        user_id=test_user.id,
        email=test_user.email,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_and_login(client: AsyncClient):
    """Register a user through the API and return the login payload."""

    async def _register_and_login(
        email: str,
        password: str = TEST_PASSWORD,
        first_name: str = "Ann",
        last_name: str = "Bell",
    ) -> dict:
        r = await client.post(
            f"{API}/auth/register",
            json={
                "email": email,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
            },
        )
        assert r.status_code == 201, r.text
        r = await client.post(f"{API}/auth/login", json={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return r.json()["data"]

    return _register_and_login
