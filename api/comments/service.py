"""
Comment business logic.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

from core.errors import ForeignKeyViolation

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_comment_response(row: dict) -> schemas.CommentResponse:
    return schemas.CommentResponse(
        comment_id=int(row["comment_id"]),
        post_id=int(row["post_id"]),
        user_id=int(row["user_id"]),
        content=str(row["content"]),
        created_at=row.get("created_at"),
    )


async def list_for_post(pool: asyncpg.Pool, post_id: int) -> list[schemas.CommentResponse]:
    rows = await repository.list_comments_for_post(pool, post_id)
    return [_to_comment_response(row) for row in rows]


async def create_for_post(
    pool: asyncpg.Pool,
    post_id: int,
    payload: schemas.CreateCommentRequest,
    *,
    user_id: int,
) -> schemas.CommentResponse:
    text = payload.text or ""
    if not post_id or not text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Post ID and comment text are required.",
        )

    try:
        row = await repository.insert_comment(pool, post_id=post_id, user_id=user_id, content=text)
    except ForeignKeyViolation as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.") from exc

    logger.info("comment_created comment_id=%s post_id=%s user_id=%s", row["comment_id"], post_id, user_id)
    return _to_comment_response(row)


async def delete_comment(
    pool: asyncpg.Pool,
    comment_id: int,
    *,
    user_id: int,
) -> schemas.DeleteCommentResponse:
    row = await repository.delete_comment_owned_by(pool, comment_id, user_id=user_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not the author of this comment.",
        )

    logger.info("comment_deleted comment_id=%s user_id=%s", comment_id, user_id)
    return schemas.DeleteCommentResponse(comment_id=comment_id, message="Comment deleted successfully.")
