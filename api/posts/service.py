"""
Post business logic.

Feed flow:
1) Load the ids the user follows
2) No follows -> the user's own posts only
3) Otherwise -> posts authored by any followee or by the user
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import HTTPException, status

from users import repository as user_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_post_response(row: dict) -> schemas.PostResponse:
    return schemas.PostResponse(
        post_id=int(row["post_id"]),
        user_id=int(row["user_id"]),
        content=str(row["content"]),
        created_at=row.get("created_at"),
    )


async def feed(pool: asyncpg.Pool, *, user_id: int) -> list[schemas.PostResponse]:
    following_ids = await user_repository.list_following_ids(pool, user_id)
    if not following_ids:
        rows = await repository.list_posts_by_author(pool, user_id)
    else:
        author_ids = sorted(set(following_ids) | {user_id})
        rows = await repository.list_posts_by_authors(pool, author_ids)
    return [_to_post_response(row) for row in rows]


async def create_post(
    pool: asyncpg.Pool,
    payload: schemas.CreatePostRequest,
    *,
    user_id: int,
) -> schemas.PostResponse:
    content = payload.content or ""
    if not content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Post content is required.",
        )

    row = await repository.insert_post(pool, user_id=user_id, content=content)
    logger.info("post_created post_id=%s user_id=%s", row["post_id"], user_id)
    return _to_post_response(row)


async def get_post(pool: asyncpg.Pool, post_id: int) -> schemas.PostResponse:
    row = await repository.get_post(pool, post_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.")
    return _to_post_response(row)


async def delete_post(pool: asyncpg.Pool, post_id: int, *, user_id: int) -> schemas.DeletePostResponse:
    # Missing and not-owned both answer 403; callers cannot tell them apart.
    row = await repository.delete_post_owned_by(pool, post_id, user_id=user_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not the author of this post.",
        )

    logger.info("post_deleted post_id=%s user_id=%s", post_id, user_id)
    return schemas.DeletePostResponse(post_id=post_id, message="Post deleted successfully.")
