"""
Like API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Path, status

from auth import dependencies as auth_dependencies
from auth import schemas as auth_schemas
from core import db

from . import schemas, service

router = APIRouter()


@router.post(
    "/likes",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.LikeResponse,
)
async def create_like(
    payload: schemas.CreateLikeRequest,
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.LikeResponse:
    return await service.like_post(pool, payload, user_id=current_user.id)


@router.delete("/likes/{post_id}", response_model=schemas.LikeResponse)
async def remove_like(
    post_id: int = Path(ge=1, le=db.PG_INT_MAX),
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.LikeResponse:
    return await service.unlike_post(pool, post_id, user_id=current_user.id)
