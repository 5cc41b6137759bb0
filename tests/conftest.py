"""
Top-level pytest configuration.

Provides:
  - A fresh in-memory SQLite database (aiosqlite) per test with all tables
    created, so unique constraints behave exactly as in production.
  - A db_session fixture bound to that database.
  - An async_client fixture wired to the FastAPI app with get_db overridden.
  - Seeded family / caregiver / job post fixtures and their auth headers.
"""

from __future__ import annotations

import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

# ---------------------------------------------------------------------------
# Environment must be set BEFORE any app module is imported so that
# pydantic-settings picks up the test values.
# ---------------------------------------------------------------------------
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_DB", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-32c")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)


# ---------------------------------------------------------------------------
# Per-test engine: a brand new in-memory database, shared across connections
# via StaticPool so the session and the app see the same rows.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine():
    """Create the SQLite test engine and all tables for one test."""
    # Import Base here (after env vars are set) to ensure models register.
    from app.core.database import Base
    import app.models  # noqa: F401

    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session on the per-test database."""
    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()


# ---------------------------------------------------------------------------
# Override FastAPI database dependency to use the test session.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an httpx AsyncClient backed by the FastAPI app.

    The app's get_db dependency is overridden to yield the test session so all
    requests in a test share the same session and see data seeded in the test.
    """
    from app.core.database import get_db
    from app.main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seeded fixtures
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def family(db_session: AsyncSession):
    """Persisted family user with a complete profile."""
    from tests.factories import UserFactory
    from app.models.user import UserRole

    return await UserFactory.create_async(
        db_session,
        email="family@example.com",
        role=UserRole.FAMILY,
        name="The Smiths",
        location="San Francisco, CA",
    )


@pytest_asyncio.fixture
async def caregiver(db_session: AsyncSession):
    """Persisted caregiver user with a complete profile."""
    from tests.factories import UserFactory
    from app.models.user import UserRole

    return await UserFactory.create_async(
        db_session,
        email="caregiver@example.com",
        role=UserRole.CAREGIVER,
        name="Sarah Johnson",
        location="San Francisco, CA",
    )


@pytest_asyncio.fixture
async def job_post(db_session: AsyncSession, family):
    """Persisted job post owned by the family fixture."""
    from tests.factories import JobPostFactory

    return await JobPostFactory.create_async(
        db_session,
        family_id=family.id,
        created_at=datetime.now(timezone.utc) - timedelta(days=1),
    )


def _auth_headers(user) -> dict[str, str]:
    from app.core.security import create_access_token
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def family_headers(family) -> dict[str, str]:
    """Authorization headers for the family test user."""
    return _auth_headers(family)


@pytest.fixture
def caregiver_headers(caregiver) -> dict[str, str]:
    """Authorization headers for the caregiver test user."""
    return _auth_headers(caregiver)


@pytest.fixture
def auth_headers_for():
    """Build authorization headers for any persisted user."""
    return _auth_headers


@pytest.fixture
def random_id() -> uuid.UUID:
    return uuid.uuid4()
