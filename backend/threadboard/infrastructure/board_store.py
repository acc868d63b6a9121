"""SQL Board Store — BoardStore implementation over one AsyncSession.

Invariants:
    - One SqlBoardStore per AsyncSession (per request); never shared across tasks
    - get_topic_for_update issues SELECT ... FOR UPDATE; the lock lives until commit/rollback
    - transaction() commits on success, rolls back on ANY exception, and re-raises
      SQLAlchemy failures as board errors via map_store_error
    - delete_post is a soft delete; count_live_posts and list_posts skip soft-deleted rows
    - Every write is flushed before returning so later reads in the same transaction see it

Design Decisions:
    - Commit/rollback instead of session.begin(): the session may already have autobegun
      a transaction on a previous read, and commit() works in both cases
    - populate_existing on the locked read: a row cached in the identity map is
      refreshed with the values read under the lock
    - recount_all_topics is one correlated UPDATE, portable across PostgreSQL and SQLite
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from threadboard.infrastructure.database import map_store_error
from threadboard.models.post import Post
from threadboard.models.topic import Topic

logger = logging.getLogger(__name__)


class SqlBoardStore:
    """Topic and post persistence for the consistency engine."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[None, None]:
        try:
            yield
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise map_store_error(e) from e
        except Exception:
            await self.db.rollback()
            raise

    # ─── Topics ──────────────────────────────────────────────────

    async def get_topic(self, topic_id: int) -> Topic | None:
        result = await self.db.execute(
            select(Topic).where(Topic.id == topic_id),
        )
        return result.scalar_one_or_none()

    async def get_topic_for_update(self, topic_id: int) -> Topic | None:
        result = await self.db.execute(
            select(Topic)
            .where(Topic.id == topic_id)
            .with_for_update()
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def insert_topic(self, title: str, summary: str | None) -> Topic:
        topic = Topic(title=title, summary=summary, posts_count=0, locked=False)
        self.db.add(topic)
        await self.db.flush()
        return topic

    async def update_topic(self, topic_id: int, **fields: Any) -> Topic:
        topic = await self.db.get(Topic, topic_id)
        if topic is None:
            raise LookupError(f"topic {topic_id} vanished inside its own transaction")
        for name, value in fields.items():
            setattr(topic, name, value)
        topic.updated_at = datetime.now(timezone.utc)
        await self.db.flush()
        return topic

    async def count_topics(self) -> int:
        result = await self.db.execute(select(func.count(Topic.id)))
        return result.scalar_one()

    async def list_topics(self) -> list[Topic]:
        result = await self.db.execute(
            select(Topic)
            .where(Topic.deleted_at.is_(None))
            .order_by(Topic.id.desc()),
        )
        return list(result.scalars().all())

    async def recount_all_topics(self) -> int:
        live_count = (
            select(func.count(Post.id))
            .where(Post.topic_id == Topic.id)
            .where(Post.deleted_at.is_(None))
            .scalar_subquery()
        )
        result = await self.db.execute(
            update(Topic)
            .where(Topic.deleted_at.is_(None))
            .where(Topic.posts_count != live_count)
            .values(posts_count=live_count)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount or 0

    # ─── Posts ───────────────────────────────────────────────────

    async def insert_post(
        self, topic_id: int, body: str, is_system: bool,
    ) -> Post:
        post = Post(topic_id=topic_id, body=body, is_system=is_system)
        self.db.add(post)
        await self.db.flush()
        return post

    async def get_post(self, topic_id: int, post_id: int) -> Post | None:
        result = await self.db.execute(
            select(Post)
            .where(Post.id == post_id)
            .where(Post.topic_id == topic_id)
            .where(Post.deleted_at.is_(None)),
        )
        return result.scalar_one_or_none()

    async def delete_post(self, post_id: int) -> None:
        await self.db.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(deleted_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session="fetch"),
        )

    async def count_live_posts(self, topic_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Post.id))
            .where(Post.topic_id == topic_id)
            .where(Post.deleted_at.is_(None)),
        )
        return result.scalar_one()

    async def list_posts(
        self, topic_id: int, limit: int, offset: int,
    ) -> tuple[list[Post], int]:
        result = await self.db.execute(
            select(Post)
            .where(Post.topic_id == topic_id)
            .where(Post.deleted_at.is_(None))
            .order_by(Post.id.asc())
            .limit(limit)
            .offset(offset),
        )
        items = list(result.scalars().all())
        total = await self.count_live_posts(topic_id)
        return items, total
