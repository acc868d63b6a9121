"""threadboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BoardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Post counters reconciled (and the sample topic seeded, if enabled) before serving

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Startup maintenance goes through BoardEngine, so it follows the same locking
      and validation rules as requests
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from threadboard.api.error_handlers import register_error_handlers
from threadboard.api.routes import health, posts, topics
from threadboard.config import Settings, get_settings
from threadboard.infrastructure import database
from threadboard.infrastructure.board_store import SqlBoardStore
from threadboard.infrastructure.observability import setup_logging
from threadboard.services.board_engine import BoardEngine

logger = logging.getLogger(__name__)


async def run_startup_maintenance(
    manager: database.DatabaseSessionManager, settings: Settings,
) -> None:
    """Reconcile drifted counters and seed the sample topic, per settings."""
    async with manager.session() as db:
        engine = BoardEngine(SqlBoardStore(db), settings.to_policy())
        if settings.reconcile_on_startup:
            await engine.reconcile_post_counts()
        if settings.seed_sample_topic:
            await engine.seed_sample_topic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await run_startup_maintenance(database.db_manager, settings)
    logger.info("threadboard API started")
    yield
    logger.info("threadboard API shutting down")
    await database.db_manager.dispose()


app = FastAPI(
    title="threadboard API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(topics.router)
app.include_router(posts.router)

register_error_handlers(app)
