"""Startup Maintenance — counter reconciliation and sample seeding before serving."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select

from threadboard.config import Settings
from threadboard.infrastructure.database import DatabaseSessionManager
from threadboard.main import run_startup_maintenance
from threadboard.models.post import Post
from threadboard.models.topic import Topic
from threadboard.services.board_engine import SAMPLE_POSTS, SAMPLE_TOPIC_TITLE


@pytest.fixture
def manager(test_engine, test_session_factory):
    fake = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake.engine = test_engine
    fake._session_factory = test_session_factory
    return fake


def _settings(**overrides) -> Settings:
    values = {"reconcile_on_startup": False, "seed_sample_topic": False}
    values.update(overrides)
    return Settings(_env_file=None, **values)


async def test_reconcile_fixes_drifted_counters(manager, test_db):
    topic = Topic(title="drifted", posts_count=40)
    test_db.add(topic)
    await test_db.flush()
    test_db.add_all([Post(topic_id=topic.id, body=f"p{i}") for i in range(3)])
    test_db.add(
        Post(topic_id=topic.id, body="gone", deleted_at=datetime.now(timezone.utc)),
    )
    await test_db.commit()

    await run_startup_maintenance(manager, _settings(reconcile_on_startup=True))

    await test_db.refresh(topic)
    assert topic.posts_count == 3


async def test_seed_runs_once_on_empty_board(manager, test_db):
    settings = _settings(seed_sample_topic=True)
    await run_startup_maintenance(manager, settings)
    await run_startup_maintenance(manager, settings)

    topics = (await test_db.execute(select(Topic))).scalars().all()
    assert [t.title for t in topics] == [SAMPLE_TOPIC_TITLE]
    assert topics[0].posts_count == len(SAMPLE_POSTS)


async def test_seed_succeeds_under_tight_limits(manager, test_db):
    settings = _settings(
        seed_sample_topic=True, max_posts_per_topic=2, max_post_body_length=10,
    )
    await run_startup_maintenance(manager, settings)

    topic = (await test_db.execute(select(Topic))).scalar_one()
    posts = (await test_db.execute(select(Post))).scalars().all()
    assert topic.posts_count == 1
    assert topic.locked is False
    assert [p.body for p in posts] == [SAMPLE_POSTS[0]]


async def test_disabled_maintenance_leaves_board_alone(manager, test_db):
    await run_startup_maintenance(manager, _settings())
    assert (await test_db.execute(select(Topic))).scalars().all() == []
