"""Boundary Protocols — contracts between the engine and the transactional store.

Invariants:
    - Core and services NEVER import the SQL store — dependency arrows point inward only
    - get_topic_for_update holds an exclusive row lock until the enclosing transaction ends
    - transaction() commits on normal exit and rolls back every change on any exception
    - count_live_posts reflects delete_post made earlier in the same transaction

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, the pure checks in core stay sync
    - TopicLike / PostLike instead of ORM types: the in-memory test store hands back
      plain dataclasses, the SQL store hands back ORM rows
"""

from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import Any, Protocol


class TopicLike(Protocol):
    """Structural contract for topic rows."""
    id: int
    title: str
    summary: str | None
    locked: bool
    posts_count: int
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime


class PostLike(Protocol):
    """Structural contract for post rows."""
    id: int
    topic_id: int
    body: str
    is_system: bool
    deleted_at: datetime | None
    created_at: datetime


class BoardStore(Protocol):
    """Contract for topic/post persistence — implemented by shell."""

    def transaction(self) -> AbstractAsyncContextManager[None]: ...

    # Topics
    async def get_topic(self, topic_id: int) -> TopicLike | None: ...
    async def get_topic_for_update(self, topic_id: int) -> TopicLike | None: ...
    async def insert_topic(self, title: str, summary: str | None) -> TopicLike: ...
    async def update_topic(self, topic_id: int, **fields: Any) -> TopicLike: ...
    async def count_topics(self) -> int: ...
    async def list_topics(self) -> list[TopicLike]: ...
    async def recount_all_topics(self) -> int: ...

    # Posts
    async def insert_post(
        self, topic_id: int, body: str, is_system: bool,
    ) -> PostLike: ...
    async def get_post(self, topic_id: int, post_id: int) -> PostLike | None: ...
    async def delete_post(self, post_id: int) -> None: ...
    async def count_live_posts(self, topic_id: int) -> int: ...
    async def list_posts(
        self, topic_id: int, limit: int, offset: int,
    ) -> tuple[list[PostLike], int]: ...
