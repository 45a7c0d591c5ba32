"""
User API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies
from auth import schemas as auth_schemas
from core import db

from . import schemas, service

router = APIRouter()


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CreateUserResponse,
)
async def create_user(
    payload: schemas.CreateUserRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> schemas.CreateUserResponse:
    return await service.create_user(pool, payload)


@router.post("/users/login", response_model=auth_schemas.TokenResponse)
async def login(
    payload: schemas.LoginRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
) -> auth_schemas.TokenResponse:
    return await service.login(pool, payload)


@router.get("/users", response_model=list[schemas.UserResponse])
async def list_users(
    pool: asyncpg.Pool = Depends(db.get_pool),
    _: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> list[schemas.UserResponse]:
    return await service.list_users(pool)


@router.get("/users/me", response_model=schemas.UserResponse)
async def me(
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.UserResponse:
    return await service.me(pool, user_id=current_user.id)


@router.get("/users/search", response_model=list[schemas.UserSearchResult])
async def search_users(
    name: str | None = Query(default=None, max_length=100),
    pool: asyncpg.Pool = Depends(db.get_pool),
    _: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> list[schemas.UserSearchResult]:
    return await service.search_by_name(pool, name)


@router.post(
    "/users/follow",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.FollowResponse,
)
async def follow_user(
    payload: schemas.FollowRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.FollowResponse:
    return await service.follow(pool, payload, follower_id=current_user.id)
