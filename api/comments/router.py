"""
Comment API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Path, status

from auth import dependencies as auth_dependencies
from auth import schemas as auth_schemas
from core import db

from . import schemas, service

router = APIRouter()


@router.get("/posts/{post_id}/comments", response_model=list[schemas.CommentResponse])
async def list_comments(
    post_id: int = Path(ge=1, le=db.PG_INT_MAX),
    pool: asyncpg.Pool = Depends(db.get_pool),
    _: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> list[schemas.CommentResponse]:
    return await service.list_for_post(pool, post_id)


@router.post(
    "/posts/{post_id}/comments",
    status_code=status.HTTP_201_CREATED,
    response_model=schemas.CommentResponse,
)
async def create_comment(
    payload: schemas.CreateCommentRequest,
    post_id: int = Path(ge=1, le=db.PG_INT_MAX),
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.CommentResponse:
    return await service.create_for_post(pool, post_id, payload, user_id=current_user.id)


@router.delete("/comments/{comment_id}", response_model=schemas.DeleteCommentResponse)
async def delete_comment(
    comment_id: int = Path(ge=1, le=db.PG_INT_MAX),
    pool: asyncpg.Pool = Depends(db.get_pool),
    current_user: auth_schemas.AuthenticatedUser = Depends(auth_dependencies.get_current_user),
) -> schemas.DeleteCommentResponse:
    """
    Delete a comment written by the current user.
    """
    return await service.delete_comment(pool, comment_id, user_id=current_user.id)
