"""Engine test fixtures — in-memory store shared by per-caller engines.

Invariants:
    - Every test gets a fresh FakeDatabase
    - make_engine() returns a NEW engine + store each call, like one request each
    - small_policy keeps capacity at 3 so transition tests stay short

Design Decisions:
    - Engine tests run against FakeBoardStore: row locks are asyncio.Locks, so
      concurrency properties are exercised deterministically without PostgreSQL
"""

import pytest

from threadboard.core.domain_types import BoardPolicy
from threadboard.services.board_engine import BoardEngine
from tests.services.fake_store import NOTICE, FakeBoardStore, FakeDatabase


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def small_policy():
    return BoardPolicy(
        capacity_limit=3, max_post_body_length=200, limit_notice=NOTICE,
        default_page_size=10, max_page_size=10,
    )


@pytest.fixture
def make_engine(fake_db, small_policy):
    def _make(policy: BoardPolicy | None = None) -> BoardEngine:
        return BoardEngine(FakeBoardStore(fake_db), policy or small_policy)
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()

