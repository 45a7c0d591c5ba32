"""
User business logic: signup, login, name search, following.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

from auth import schemas as auth_schemas
from auth import security
from auth import service as auth_service
from core.errors import UniqueViolation

from . import repository, schemas

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str:
    return (value or "").strip()


def _to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        username=str(user_row["username"]),
        name=str(user_row["name"]),
        created_at=user_row.get("created_at"),
    )


async def create_user(pool: asyncpg.Pool, payload: schemas.CreateUserRequest) -> schemas.CreateUserResponse:
    username = _clean(payload.username)
    name = _clean(payload.name)
    password = payload.password or ""
    if not username or not password or not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username, password, and name are required.",
        )

    try:
        password_hash = security.hash_password(password)
    except security.AuthSecurityError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        user_row = await repository.create_user(
            pool,
            username=username,
            password_hash=password_hash,
            name=name,
        )
    except UniqueViolation as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username is already taken.",
        ) from exc

    user_id = int(user_row["id"])
    logger.info("user_created user_id=%s", user_id)
    return schemas.CreateUserResponse(id=user_id, message=f"User added with ID: {user_id}")


async def login(pool: asyncpg.Pool, payload: schemas.LoginRequest) -> auth_schemas.TokenResponse:
    username = _clean(payload.username)
    password = payload.password or ""
    if not username or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required.",
        )

    user_row = await repository.get_user_by_username(pool, username)
    if user_row is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    if not security.verify_password(password, str(user_row.get("password") or "")):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    return auth_service.issue_token(user_row)


async def list_users(pool: asyncpg.Pool) -> list[schemas.UserResponse]:
    rows = await repository.list_users(pool)
    return [_to_user_response(row) for row in rows]


async def me(pool: asyncpg.Pool, *, user_id: int) -> schemas.UserResponse:
    user_row = await repository.get_user_by_id(pool, user_id)
    if user_row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
    return _to_user_response(user_row)


async def search_by_name(pool: asyncpg.Pool, name: str | None) -> list[schemas.UserSearchResult]:
    query = _clean(name)
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name query parameter is required.",
        )

    rows = await repository.search_users_by_name(pool, query)
    return [
        schemas.UserSearchResult(name=str(row["name"]), username=str(row["username"]))
        for row in rows
    ]


async def follow(
    pool: asyncpg.Pool,
    payload: schemas.FollowRequest,
    *,
    follower_id: int,
) -> schemas.FollowResponse:
    # No existence, duplicate or self-follow checks: the edge is recorded as given.
    following_id = payload.following_id
    if not following_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Following ID is required.",
        )

    await repository.insert_follow(pool, follower_id=follower_id, following_id=following_id)
    logger.info("follow_created follower_id=%s following_id=%s", follower_id, following_id)
    return schemas.FollowResponse(
        follower_id=follower_id,
        following_id=following_id,
        message=f"You are now following user with ID: {following_id}",
    )
