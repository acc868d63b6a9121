"""Route test fixtures — FastAPI test client over an in-memory SQLite database.

Invariants:
    - get_db dependency overridden to use a fresh session per request
    - db_manager patched so the readiness probe hits the test database
    - get_policy overridden with a capacity of 3 so lock transitions stay short;
      use_policy swaps it mid-test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (row locks are not exercised here; see tests/services/test_board_concurrency.py)
    - ASGITransport does not run the lifespan, so no startup maintenance runs
"""

import pytest
from httpx import ASGITransport, AsyncClient

from threadboard.api.deps import get_policy
from threadboard.core.domain_types import BoardPolicy
from threadboard.infrastructure.database import get_db, DatabaseSessionManager
import threadboard.infrastructure.database as db_module
from threadboard.main import app

API_NOTICE = "Thread is full."


@pytest.fixture
def api_policy():
    return BoardPolicy(
        capacity_limit=3, max_post_body_length=200, max_topic_title_length=80,
        limit_notice=API_NOTICE, default_page_size=10, max_page_size=10,
    )


@pytest.fixture
async def client(test_engine, test_session_factory, api_policy):
    """FastAPI test client with DB and policy dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_policy] = lambda: api_policy

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def topic(client):
    """A fresh open topic, as returned by POST /topics."""
    response = await client.post("/api/v1/topics", json={"title": "General"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def use_policy(client):
    """Swap the board policy for the rest of the test."""
    def _use(policy: BoardPolicy) -> None:
        app.dependency_overrides[get_policy] = lambda: policy
    return _use
