"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from taskflow.auth.router import router as auth_router
from taskflow.config import get_settings
from taskflow.dashboard.router import router as dashboard_router
from taskflow.database import close_db, create_schema, init_db
from taskflow.goals.router import router as goals_router
from taskflow.health.router import router as health_router
from taskflow.learning.router import router as learning_router
from taskflow.middleware import setup_middleware
from taskflow.notes.router import router as notes_router
from taskflow.projects.router import router as projects_router
from taskflow.prs.router import router as prs_router
from taskflow.realtime.events import EventEmitter
from taskflow.realtime.manager import ChannelManager
from taskflow.realtime.router import router as realtime_router
from taskflow.redis_client import close_redis, init_redis
from taskflow.study.router import router as study_router
from taskflow.tasks.router import router as tasks_router
from taskflow.timetracking.router import router as timetracking_router
from taskflow.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url, settings.db_pool_size, settings.db_max_overflow)
    if settings.db_auto_create:
        await create_schema()
    if settings.redis_url:
        await init_redis(settings.redis_url, settings.redis_max_connections)
    logger.info("app_started", environment=settings.environment, version=settings.app_version)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Raises a pydantic ``ValidationError`` when required settings are missing.
    """
    settings = get_settings()

    app = FastAPI(
        title="TaskFlow API",
        description="Backend API for TaskFlow, a personal productivity tracker with live task updates",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    channels = ChannelManager()
    app.state.channels = channels
    app.state.events = EventEmitter(channels)

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(tasks_router)
    app.include_router(learning_router)
    app.include_router(notes_router)
    app.include_router(prs_router)
    app.include_router(projects_router)
    app.include_router(goals_router)
    app.include_router(study_router)
    app.include_router(timetracking_router)
    app.include_router(dashboard_router)
    app.include_router(realtime_router)

    return app


app = create_app()
