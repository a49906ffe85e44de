"""User endpoints: /api/user, /api/username/check and /api/users/*."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from gamehub.config import get_settings
from gamehub.database import get_session
from gamehub.errors import NotFound
from gamehub.identity import get_identity
from gamehub.users.schemas import (
    ProfileEnvelope,
    ProfileResponse,
    ProfileUpdateRequest,
    PublicUserEnvelope,
    PublicUserResponse,
    UserCreateRequest,
    UserDirectoryResponse,
    UsernameCheckResponse,
)
from gamehub.users.service import (
    get_or_create_user,
    get_user_by_id,
    get_user_by_username,
    is_username_available,
    list_users,
    update_user_profile,
)
from gamehub.users.validation import USERNAME_FORMAT_MESSAGE, is_valid_username

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["Users"])


# ---------------------------------------------------------------------------
# Own profile
# ---------------------------------------------------------------------------


@router.post("/user", response_model=ProfileEnvelope)
async def get_or_create_profile(
    body: UserCreateRequest,
    db: AsyncSession = Depends(get_session),
) -> ProfileEnvelope:
    """Return the caller's profile, creating it on first contact."""
    user, created = await get_or_create_user(db, body.user_id, body.email)
    if created:
        await db.commit()
    return ProfileEnvelope(profile=ProfileResponse.model_validate(user))


@router.get("/user", response_model=ProfileEnvelope)
async def get_profile(
    user_id: str = Depends(get_identity),
    db: AsyncSession = Depends(get_session),
) -> ProfileEnvelope:
    user = await get_user_by_id(db, user_id)
    if user is None:
        msg = "User not found"
        raise NotFound(msg)
    return ProfileEnvelope(profile=ProfileResponse.model_validate(user))


@router.patch("/user", response_model=ProfileEnvelope)
async def update_profile(
    body: ProfileUpdateRequest,
    user_id: str = Depends(get_identity),
    db: AsyncSession = Depends(get_session),
) -> ProfileEnvelope:
    """Update username, avatar_url and/or wallet_address."""
    user = await update_user_profile(
        db,
        user_id,
        username=body.username,
        avatar_url=body.avatar_url,
        wallet_address=body.wallet_address,
    )
    await db.commit()
    return ProfileEnvelope(profile=ProfileResponse.model_validate(user))


# ---------------------------------------------------------------------------
# Username availability
# ---------------------------------------------------------------------------


@router.get("/username/check", response_model=UsernameCheckResponse)
async def check_username(
    username: str | None = Query(None),
    user_id: str | None = Query(None, alias="userId"),
    db: AsyncSession = Depends(get_session),
) -> UsernameCheckResponse | JSONResponse:
    """Format check first, then uniqueness against everyone except ``userId``."""
    if not username or not username.strip():
        return JSONResponse(status_code=400, content={"error": "Username is required"})
    if not is_valid_username(username):
        return JSONResponse(status_code=400, content={"available": False, "error": USERNAME_FORMAT_MESSAGE})

    available = await is_username_available(db, username, excluding_user_id=user_id or None)
    return UsernameCheckResponse(available=available, username=username)


# ---------------------------------------------------------------------------
# Public profiles
# ---------------------------------------------------------------------------


@router.get("/users", response_model=UserDirectoryResponse)
async def user_directory(db: AsyncSession = Depends(get_session)) -> UserDirectoryResponse:
    users = await list_users(db, limit=get_settings().directory_limit)
    return UserDirectoryResponse(users=[PublicUserResponse.model_validate(u) for u in users])


@router.get("/users/{username}", response_model=PublicUserEnvelope)
async def get_public_profile(
    username: str,
    db: AsyncSession = Depends(get_session),
) -> PublicUserEnvelope:
    """Public profile by username (case-insensitive)."""
    user = await get_user_by_username(db, username)
    if user is None:
        msg = "User not found"
        raise NotFound(msg)
    return PublicUserEnvelope(user=PublicUserResponse.model_validate(user))
