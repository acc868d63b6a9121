"""ORM Models — SQLAlchemy declarative models for topics and posts.

Invariants:
    - All models inherit from Base (db/base.py)
    - Topic is the aggregate root; posts are scoped by topic_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from threadboard.models.topic import Topic  # noqa: F401
from threadboard.models.post import Post  # noqa: F401
