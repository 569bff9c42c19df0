"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite database (aiosqlite on a StaticPool)
with the full schema created from the models. HTTP tests talk to the FastAPI
app through httpx's ASGITransport with ``get_db`` overridden to use that
database.
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = ""
os.environ["DB_HOST"] = ""
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["JWT_EXPIRES_IN"] = "1h"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from portfolio_api.database import Base, get_db
from portfolio_api.models import User
from portfolio_api.utils.auth import hash_password
from portfolio_api.utils.jwt_auth import create_access_token

import portfolio_api.models  # noqa: F401


TEST_PASSWORD = "correct horse battery staple"


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_fk(dbapi_conn, _):
        """SQLite ignores FKs by default, turn them on."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient bound to the app, with get_db pointed at the test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    from portfolio_api.main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token({"sub": "1", "userId": 1, "email": "admin@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_user(session_factory):
    """A login user with TEST_PASSWORD (low bcrypt cost to keep tests fast)."""
    async with session_factory() as session:
        user = User(
            username="admin",
            email="admin@example.com",
            password_hash=hash_password(TEST_PASSWORD, rounds=4),
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


@pytest.fixture
def user_password():
    return TEST_PASSWORD
