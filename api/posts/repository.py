"""
Post persistence (raw SQL).
"""

from __future__ import annotations

import asyncpg

from core import db

_COLUMNS = "post_id, user_id, content, created_at"


async def insert_post(pool: asyncpg.Pool, *, user_id: int, content: str) -> dict:
    row = await db.fetch_one(
        pool,
        f"""
        INSERT INTO posts (user_id, content)
        VALUES ($1, $2)
        RETURNING {_COLUMNS}
        """,
        user_id,
        content,
    )
    if row is None:
        raise RuntimeError("Failed to insert post.")
    return row


async def get_post(pool: asyncpg.Pool, post_id: int) -> dict | None:
    return await db.fetch_one(
        pool,
        f"""
        SELECT {_COLUMNS}
        FROM posts
        WHERE post_id = $1
        """,
        post_id,
    )


async def list_posts_by_author(pool: asyncpg.Pool, user_id: int) -> list[dict]:
    return await db.fetch_all(
        pool,
        f"""
        SELECT {_COLUMNS}
        FROM posts
        WHERE user_id = $1
        ORDER BY created_at DESC, post_id DESC
        """,
        user_id,
    )


async def list_posts_by_authors(pool: asyncpg.Pool, user_ids: list[int]) -> list[dict]:
    return await db.fetch_all(
        pool,
        f"""
        SELECT {_COLUMNS}
        FROM posts
        WHERE user_id = ANY($1::int[])
        ORDER BY created_at DESC, post_id DESC
        """,
        user_ids,
    )


async def delete_post_owned_by(pool: asyncpg.Pool, post_id: int, *, user_id: int) -> dict | None:
    """
    Delete a post only when `user_id` authored it.

    Returns the deleted row's id, or None when nothing matched (missing post
    or someone else's post).
    """
    return await db.fetch_one(
        pool,
        """
        DELETE FROM posts
        WHERE post_id = $1
          AND user_id = $2
        RETURNING post_id
        """,
        post_id,
        user_id,
    )
