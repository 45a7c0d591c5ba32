"""
Like business logic.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

from core.errors import ForeignKeyViolation

from . import repository, schemas

logger = logging.getLogger(__name__)


async def like_post(pool: asyncpg.Pool, payload: schemas.CreateLikeRequest, *, user_id: int) -> schemas.LikeResponse:
    post_id = payload.post_id
    if not post_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Post ID is required.",
        )

    try:
        row = await repository.insert_like(pool, post_id=post_id, user_id=user_id)
    except ForeignKeyViolation as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.") from exc

    if row is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You have already liked this post.",
        )

    logger.info("like_created post_id=%s user_id=%s", post_id, user_id)
    return schemas.LikeResponse(post_id=post_id, user_id=user_id, message="Like created successfully.")


async def unlike_post(pool: asyncpg.Pool, post_id: int, *, user_id: int) -> schemas.LikeResponse:
    # Removing a like that never existed is still a success.
    removed = await repository.delete_like(pool, post_id=post_id, user_id=user_id)
    logger.info("like_removed post_id=%s user_id=%s removed=%s", post_id, user_id, removed)
    return schemas.LikeResponse(post_id=post_id, user_id=user_id, message="Like removed successfully.")
