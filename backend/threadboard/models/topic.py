"""Topic ORM — a capacity-bounded, lockable thread.

Invariants:
    - id is a monotonic integer primary key (newest topic has the highest id)
    - posts_count is the denormalized number of live posts; only the engine writes it
    - locked only ever goes False -> True
    - deleted_at set means soft-deleted: hidden from listings, rejects posts

Design Decisions:
    - posts relationship is lazy="raise": listing topics must never pull their posts,
      and posts are always read through explicit paginated queries
    - passive_deletes: the FK's ON DELETE CASCADE removes posts if a topic row is hard-deleted
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadboard.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Topic(Base):
    """Topic aggregate root — owns its posts."""
    __tablename__ = "topics"
    __table_args__ = (
        CheckConstraint("posts_count >= 0", name="topics_posts_count_non_negative"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    posts_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    locked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="topic",
        passive_deletes=True, lazy="raise",
    )
