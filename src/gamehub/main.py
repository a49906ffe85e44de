"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from gamehub.config import get_settings
from gamehub.database import close_db, create_all, init_db
from gamehub.games.router import router as games_router
from gamehub.health.router import router as health_router
from gamehub.middleware import setup_middleware
from gamehub.redis_client import close_redis, init_redis
from gamehub.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    if settings.uses_sqlite:
        # Local runs without Alembic get their schema straight from the models
        await create_all()
    if settings.redis_url:
        await init_redis(settings.redis_url, max_connections=settings.redis_max_connections)
    logger.info(
        "startup_complete",
        environment=settings.environment,
        version=settings.app_version,
        rate_limiting=bool(settings.redis_url),
    )

    yield

    await close_redis()
    await close_db()
    logger.info("shutdown_complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Mini-Games Hub API",
        description="Accounts, game sessions and leaderboards for MathMode, Snake and TypeMaster",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(users_router)
    app.include_router(games_router)

    return app


app = create_app()
