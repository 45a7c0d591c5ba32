"""
User API schemas.

Required fields are declared optional on purpose: presence is checked in the
service layer so a missing field answers 400 with a readable message instead
of FastAPI's 422 validation dump.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from core.db import PG_INT_MAX


class CreateUserRequest(BaseModel):
    username: str | None = Field(default=None, max_length=50)
    password: str | None = Field(default=None, max_length=128)
    name: str | None = Field(default=None, max_length=100)


class LoginRequest(BaseModel):
    username: str | None = Field(default=None, max_length=50)
    password: str | None = Field(default=None, max_length=128)


class FollowRequest(BaseModel):
    following_id: int | None = Field(
        default=None,
        ge=1,
        le=PG_INT_MAX,
        validation_alias=AliasChoices("followingId", "userId", "following_id"),
    )


class UserResponse(BaseModel):
    id: int
    username: str
    name: str
    created_at: datetime | None = None


class UserSearchResult(BaseModel):
    name: str
    username: str


class CreateUserResponse(BaseModel):
    id: int
    message: str


class FollowResponse(BaseModel):
    follower_id: int
    following_id: int
    message: str
