"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Every board limit is >= 1 and default_page_size <= max_page_size
    - max_topic_title_length never exceeds the topics.title column width (255)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box with docker-compose
    - to_policy() is the only bridge from settings to the engine's BoardPolicy
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from threadboard.core.domain_types import BoardPolicy, DEFAULT_LIMIT_NOTICE

TITLE_COLUMN_WIDTH = 255


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://board:board@db:5432/board"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Board rules
    max_posts_per_topic: int = 50
    max_post_body_length: int = 200
    max_topic_title_length: int = 80
    limit_notice_message: str = DEFAULT_LIMIT_NOTICE
    default_page_size: int = 10
    max_page_size: int = 10

    # Startup maintenance
    reconcile_on_startup: bool = True
    seed_sample_topic: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator(
        "max_posts_per_topic", "max_post_body_length", "max_topic_title_length",
        "default_page_size", "max_page_size",
    )
    @classmethod
    def require_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("max_topic_title_length")
    @classmethod
    def fit_title_column(cls, v: int) -> int:
        if v > TITLE_COLUMN_WIDTH:
            raise ValueError(f"must be <= {TITLE_COLUMN_WIDTH}")
        return v

    @model_validator(mode="after")
    def check_page_sizes(self):
        if self.default_page_size > self.max_page_size:
            raise ValueError("default_page_size cannot exceed max_page_size")
        return self

    def to_policy(self) -> BoardPolicy:
        return BoardPolicy(
            capacity_limit=self.max_posts_per_topic,
            max_post_body_length=self.max_post_body_length,
            max_topic_title_length=self.max_topic_title_length,
            limit_notice=self.limit_notice_message,
            default_page_size=self.default_page_size,
            max_page_size=self.max_page_size,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
