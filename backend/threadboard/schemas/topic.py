"""Topic Schemas — Pydantic request/response models for the topic endpoints.

Invariants:
    - Request models check shape and types only; title rules live in the engine
    - TopicUpdate rejects an empty patch (at least one field must be provided)
    - Responses are built from ORM rows (from_attributes)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator


class TopicCreate(BaseModel):
    """Topic creation payload."""
    title: str
    summary: str | None = None


class TopicUpdate(BaseModel):
    """Partial topic edit — locked may only be set to true."""
    title: str | None = None
    summary: str | None = None
    locked: bool | None = None

    @model_validator(mode="after")
    def require_any_field(self):
        if self.title is None and self.summary is None and self.locked is None:
            raise ValueError("provide at least one of title, summary, locked")
        return self


class TopicResponse(BaseModel):
    """Topic response — public-facing topic data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    summary: str | None
    posts_count: int
    locked: bool
    created_at: datetime
    updated_at: datetime


class TopicStateResponse(BaseModel):
    """Counter and lock state of a topic after a post mutation."""
    id: int
    posts_count: int
    locked: bool
