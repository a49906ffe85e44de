"""Request/response schemas for user endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserCreateRequest(BaseModel):
    """First authenticated contact from the client."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")


class ProfileUpdateRequest(BaseModel):
    """Profile edit. Omitted fields are left untouched; the username format is checked by the service."""

    username: str | None = None
    avatar_url: str | None = Field(None, max_length=2048)
    wallet_address: str | None = Field(None, max_length=255)


class ProfileResponse(BaseModel):
    """The caller's own profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str | None
    avatar_url: str | None
    wallet_address: str | None
    total_games_played: int
    total_score: int
    created_at: datetime
    updated_at: datetime


class ProfileEnvelope(BaseModel):
    profile: ProfileResponse


class PublicUserResponse(BaseModel):
    """What anyone may see about a user."""

    model_config = ConfigDict(from_attributes=True)

    username: str | None
    avatar_url: str | None
    total_games_played: int
    total_score: int
    created_at: datetime


class PublicUserEnvelope(BaseModel):
    user: PublicUserResponse


class UserDirectoryResponse(BaseModel):
    users: list[PublicUserResponse]


class UsernameCheckResponse(BaseModel):
    available: bool
    username: str
