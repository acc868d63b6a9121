"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata (Alembic target_metadata)

Design Decisions:
    - Separate file for Base: avoids circular imports between topic and post models
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all threadboard ORM models."""
    pass
