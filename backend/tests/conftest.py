"""
ITR API: Test Configuration (conftest.py)
=========================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_engine:        In-memory SQLite engine with the employees table
    ├── db_session:       AsyncSession bound to db_engine
    ├── mock_db_session:  AsyncMock session for failure injection
    ├── employee_payload: Valid create body
    └── test_client:      HTTPX AsyncClient over a fresh app whose session
                          dependency is bound to db_engine
"""

import os

# Settings are validated on import, so the environment is prepared before
# any itr_api module is loaded
os.environ["DB_URL"] = "sqlite+aiosqlite:///./itr_api_test.db"
os.environ["PORT"] = "8080"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_TABLES"] = "false"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from itr_api.database import Base, get_db_session
from itr_api.models import employee as _employee_model  # noqa: F401


@pytest_asyncio.fixture
async def db_engine():
    """
    Provides an in-memory SQLite engine with the schema created.

    StaticPool keeps the single in-memory connection alive for every
    session opened during the test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Provides a real AsyncSession for record store tests."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception())
        await employee_store.find_all(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def employee_payload():
    """A valid create body, as a client would send it."""
    return {
        "name": "A",
        "salary": "50000",
        "pan_number": "ABCDE1234F",
        "year": 2023,
        "tax_income": "45000",
        "designation": "Engineer",
    }


@pytest_asyncio.fixture
async def test_app(db_engine):
    """
    A fresh application whose session dependency uses the test engine.

    The dependency keeps the production commit/rollback behavior.
    """
    from itr_api.main import create_app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport routes requests straight to the app; the lifespan is
    not run, so no connection to DB_URL is attempted.
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
