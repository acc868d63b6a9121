"""Post ORM — a single message in one topic.

Invariants:
    - Always belongs to a Topic (topic_id FK, ON DELETE CASCADE)
    - id order is display order within a topic
    - is_system marks engine-generated sentinel content
    - deleted_at set means soft-deleted: excluded from listings and from posts_count

Design Decisions:
    - No DB CHECK on body length: the limit is configurable (MAX_POST_BODY_LENGTH)
      and system notices are exempt, so the engine owns the rule
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadboard.db.base import Base


class Post(Base):
    """Post entity — user-authored or system notice."""
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    topic_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("topics.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    is_system: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    topic: Mapped["Topic"] = relationship(
        "Topic", back_populates="posts", lazy="raise",
    )
