"""Root conftest — shared test configuration and in-memory SQLite fixtures.

Invariants:
    - Every test that asks for test_engine gets a fresh in-memory SQLite database
    - Startup maintenance is disabled: tests create exactly the rows they assert on
"""

import os

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from threadboard.db.base import Base
import threadboard.models  # noqa: F401

# Ensure tests never reach a real database or pick up a developer's settings
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("RECONCILE_ON_STARTUP", "false")
os.environ.setdefault("SEED_SAMPLE_TOPIC", "false")


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
