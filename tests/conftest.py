"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Settings never read a real API key or database URL

Design Decisions:
    - SQLite in-memory via aiosqlite: fast, no external dependency; unique
      constraint violations surface as "UNIQUE constraint failed: users.<col>"
    - StaticPool: one connection, so every session sees the same :memory: DB
"""

import os

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

os.environ.setdefault("X_API_KEY", "test-api-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from cruder.core.domain_types import UserRecord  # noqa: E402
from cruder.db.base import Base  # noqa: E402
import cruder.models  # noqa: E402,F401


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def john() -> UserRecord:
    return UserRecord(
        username="john_doe", email="john@doe.ee", full_name="John Doe",
    )


@pytest.fixture
def jane() -> UserRecord:
    return UserRecord(
        username="jane_doe", email="jane@doe.ee", full_name="Jane Doe",
    )
