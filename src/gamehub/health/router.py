"""Probes for the deployment platform plus a version/catalogue endpoint."""

from typing import Literal

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.config import get_settings
from gamehub.database import get_session
from gamehub.games.registry import GAMES
from gamehub.redis_client import get_redis, redis_enabled

router = APIRouter()


class ReadinessResponse(BaseModel):
    status: Literal["ready", "degraded"]
    checks: dict[str, str]


class VersionResponse(BaseModel):
    version: str
    environment: str
    games: list[str]


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


async def _database_check(db: AsyncSession) -> str:
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        return f"error: {exc}"
    return "ok"


async def _redis_check() -> str:
    if not redis_enabled():
        return "disabled"
    try:
        await get_redis().ping()
    except RedisError as exc:
        return f"error: {exc}"
    return "ok"


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> ReadinessResponse | JSONResponse:
    """Ready once the database answers. Redis only backs rate limiting, so it may be down or disabled."""
    checks = {"database": await _database_check(db), "redis": await _redis_check()}
    body = ReadinessResponse(status="ready" if checks["database"] == "ok" else "degraded", checks=checks)
    if body.status != "ready":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body


@router.get("/version", response_model=VersionResponse)
async def version() -> VersionResponse:
    """API version, deployment environment and the games this build records."""
    settings = get_settings()
    return VersionResponse(version=settings.app_version, environment=settings.environment, games=sorted(GAMES))
