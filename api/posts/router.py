"""
Post API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Path, status

from auth import dependencies as auth_dependencies
from auth import schemas as auth_schemas
from core import db

from . import schemas, service

router = APIRouter()


@router.get("/posts/feed", response_model=list[schemas.PostResponse])
async def get_feed(
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> list[schemas.PostResponse]:
    """
    Posts by the current user and by everyone they follow.
    """
    return await service.feed(pool, user_id=current_user.id)


@router.post(
    "/posts",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.PostResponse,
)
async def create_post(
    payload: schemas.CreatePostRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.PostResponse:
    return await service.create_post(pool, payload, user_id=current_user.id)


@router.get("/posts/{post_id}", response_model=schemas.PostResponse)
async def get_post(
    post_id: int = Path(ge=1, le=db.PG_INT_MAX),
    pool: asyncpg.Pool = Depends(db.get_pool),
    _: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.PostResponse:
    return await service.get_post(pool, post_id)


@router.delete("/posts/{post_id}", response_model=schemas.DeletePostResponse)
async def delete_post(
    post_id: int = Path(ge=1, le=db.PG_INT_MAX),
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.DeletePostResponse:
    """
    Delete a post authored by the current user.
    """
    return await service.delete_post(pool, post_id, user_id=current_user.id)
