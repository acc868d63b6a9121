"""Board Engine — serialized read-check-write sequences over the BoardStore.

Invariants:
    - Every mutation runs inside store.transaction(): all-or-nothing, no partial counter
      update and no orphan sentinel post
    - The topic row lock is taken first in every mutating operation, before any post row
      is read or written, so concurrent callers on one topic serialize and lock order is uniform
    - posts_count is incremented under the lock on insert and RECOUNTED (never decremented)
      on delete, so prior drift heals on the next delete
    - The sentinel notice and locked=True are written in the same transaction as the post
      that reaches the capacity limit, at most once per topic
    - No in-process state between calls: one engine per store (per request)

Design Decisions:
    - Admission and transition decisions come from core/enforce_capacity.py (pure);
      this module only sequences store round-trips around them
    - Body is validated after the topic checks, matching the lock-then-check order:
      a locked topic reports Forbidden even for a malformed body
    - No retries: TransientStoreError propagates to the caller, who may retry the whole call
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from threadboard.core.domain_types import BoardPolicy
from threadboard.core.enforce_capacity import (
    check_post_admission, topic_state, transition_after_insert,
)
from threadboard.core.errors import (
    ErrorContext, InvalidArgumentError, ResourceNotFoundError,
)
from threadboard.core.pagination import clamp_page
from threadboard.core.repository_protocols import BoardStore, PostLike, TopicLike
from threadboard.core.validate_input import (
    normalize_post_body, normalize_summary, normalize_topic_title,
)

logger = logging.getLogger(__name__)

SAMPLE_TOPIC_TITLE = "Sample thread"
SAMPLE_TOPIC_SUMMARY = "A sample thread on this anonymous board. Feel free to post."
SAMPLE_POSTS = (
    "Welcome! Start a thread and chat freely.",
    "Posts are limited in length, and a thread closes automatically once it is full.",
    "If something goes wrong, an administrator can delete posts.",
)


@dataclass(frozen=True)
class PostCreated:
    """Result of create_post: the new post and the topic state after commit."""
    post: PostLike
    topic_id: int
    posts_count: int
    locked: bool


@dataclass(frozen=True)
class PostDeleted:
    post_id: int
    topic_id: int
    posts_count: int
    locked: bool


@dataclass(frozen=True)
class PostPage:
    items: list[PostLike]
    total: int
    limit: int
    offset: int


class BoardEngine:
    """Consistency engine for topics and their capacity-bounded posts."""

    def __init__(self, store: BoardStore, policy: BoardPolicy | None = None):
        self.store = store
        self.policy = policy or BoardPolicy()

    # ─── Topics ──────────────────────────────────────────────────

    async def create_topic(self, title: str, summary: str | None = None) -> TopicLike:
        title = normalize_topic_title(title, self.policy.max_topic_title_length)
        async with self.store.transaction():
            topic = await self.store.insert_topic(title, normalize_summary(summary))
        logger.info("Topic created", extra={"topic_id": topic.id})
        return topic

    async def get_topic(self, topic_id: int) -> TopicLike:
        topic = await self.store.get_topic(topic_id)
        if topic is None or topic.deleted_at is not None:
            raise ResourceNotFoundError("Topic", topic_id)
        return topic

    async def list_topics(self) -> list[TopicLike]:
        return await self.store.list_topics()

    async def update_topic(
        self,
        topic_id: int,
        title: str | None = None,
        summary: str | None = None,
        locked: bool | None = None,
    ) -> TopicLike:
        """Edit title/summary, or lock explicitly. Topics are never unlocked."""
        fields: dict = {}
        if title is not None:
            fields["title"] = normalize_topic_title(
                title, self.policy.max_topic_title_length,
            )
        if summary is not None:
            fields["summary"] = normalize_summary(summary)

        async with self.store.transaction():
            topic = await self.store.get_topic_for_update(topic_id)
            if topic is None or topic.deleted_at is not None:
                raise ResourceNotFoundError("Topic", topic_id)
            if locked is False and topic.locked:
                raise InvalidArgumentError("a locked topic cannot be unlocked", "locked")
            if locked and not topic.locked:
                fields["locked"] = True
            if fields:
                topic = await self.store.update_topic(topic_id, **fields)
        logger.info(
            "Topic updated",
            extra={"topic_id": topic_id, "locked": topic.locked},
        )
        return topic

    async def delete_topic(self, topic_id: int) -> None:
        """Soft delete. Posts stay in the store but disappear with their topic."""
        async with self.store.transaction():
            topic = await self.store.get_topic_for_update(topic_id)
            if topic is None or topic.deleted_at is not None:
                raise ResourceNotFoundError("Topic", topic_id)
            await self.store.update_topic(
                topic_id, deleted_at=datetime.now(timezone.utc),
            )
        logger.info("Topic deleted", extra={"topic_id": topic_id})

    # ─── Posts ───────────────────────────────────────────────────

    async def create_post(
        self, topic_id: int, body: str, is_system: bool = False,
    ) -> PostCreated:
        async with self.store.transaction():
            topic = await self.store.get_topic_for_update(topic_id)
            if topic is None:
                raise ResourceNotFoundError("Topic", topic_id)
            error = check_post_admission(topic, self.policy, is_system=is_system)
            if error:
                raise error

            if not is_system:
                body = normalize_post_body(body, self.policy.max_post_body_length)

            post = await self.store.insert_post(topic_id, body, is_system=is_system)
            posts_count = topic.posts_count + 1
            transition = transition_after_insert(
                topic_state(topic), posts_count, self.policy, is_system=is_system,
            )

            fields: dict = {"posts_count": posts_count}
            if transition.append_notice:
                await self.store.insert_post(
                    topic_id, self.policy.limit_notice, is_system=True,
                )
                fields["posts_count"] = posts_count + 1
            if transition.locks:
                fields["locked"] = True
            topic = await self.store.update_topic(topic_id, **fields)

        if transition.locks:
            logger.info(
                "Topic reached capacity and was locked",
                extra={"topic_id": topic_id, "posts_count": topic.posts_count},
            )
        logger.info(
            "Post created",
            extra={
                "topic_id": topic_id, "post_id": post.id,
                "posts_count": topic.posts_count,
            },
        )
        return PostCreated(
            post=post, topic_id=topic_id,
            posts_count=topic.posts_count, locked=topic.locked,
        )

    async def get_post(self, topic_id: int, post_id: int) -> PostLike:
        await self.get_topic(topic_id)
        post = await self.store.get_post(topic_id, post_id)
        if post is None:
            raise ResourceNotFoundError(
                "Post", post_id, ErrorContext(topic_id=topic_id, post_id=post_id),
            )
        return post

    async def delete_post(self, topic_id: int, post_id: int) -> PostDeleted:
        async with self.store.transaction():
            topic = await self.store.get_topic_for_update(topic_id)
            post = (
                await self.store.get_post(topic_id, post_id)
                if topic is not None else None
            )
            if post is None:
                raise ResourceNotFoundError(
                    "Post", post_id, ErrorContext(topic_id=topic_id, post_id=post_id),
                )
            await self.store.delete_post(post.id)
            live = await self.store.count_live_posts(topic_id)
            topic = await self.store.update_topic(topic_id, posts_count=live)
        logger.info(
            "Post deleted",
            extra={"topic_id": topic_id, "post_id": post_id, "posts_count": live},
        )
        return PostDeleted(
            post_id=post_id, topic_id=topic_id,
            posts_count=topic.posts_count, locked=topic.locked,
        )

    async def list_posts(
        self, topic_id: int, limit: int | None = None, offset: int | None = None,
    ) -> PostPage:
        await self.get_topic(topic_id)
        window = clamp_page(limit, offset, self.policy)
        items, total = await self.store.list_posts(
            topic_id, window.limit, window.offset,
        )
        return PostPage(
            items=items, total=total, limit=window.limit, offset=window.offset,
        )

    # ─── Maintenance ─────────────────────────────────────────────

    async def reconcile_post_counts(self) -> int:
        """Rewrite every drifted posts_count from the live posts. Returns rows fixed."""
        async with self.store.transaction():
            fixed = await self.store.recount_all_topics()
        if fixed:
            logger.warning(f"Reconciled posts_count on {fixed} topic(s)")
        return fixed

    async def seed_sample_topic(self) -> TopicLike | None:
        """Create a welcome topic when the store has never held a topic.

        Topic and posts are written in one transaction. Sample posts are trusted
        content: body rules are not applied, and at most capacity_limit - 1 of
        them are written so the topic stays open.
        """
        async with self.store.transaction():
            if await self.store.count_topics() > 0:
                return None
            topic = await self.store.insert_topic(
                SAMPLE_TOPIC_TITLE, SAMPLE_TOPIC_SUMMARY,
            )
            bodies = SAMPLE_POSTS[: self.policy.capacity_limit - 1]
            for body in bodies:
                await self.store.insert_post(topic.id, body, is_system=False)
            topic = await self.store.update_topic(topic.id, posts_count=len(bodies))
        logger.info("Seeded sample topic", extra={"topic_id": topic.id})
        return topic
