"""
Like persistence (raw SQL).

`likes` carries a unique index on (post_id, user_id), so a duplicate like is
refused by the database instead of by a separate lookup.
"""

from __future__ import annotations

import asyncpg

from core import db


async def insert_like(pool: asyncpg.Pool, *, post_id: int, user_id: int) -> dict | None:
    """
    Returns the new row, or None when this user already liked the post.
    """
    return await db.fetch_one(
        pool,
        """
        INSERT INTO likes (post_id, user_id)
        VALUES ($1, $2)
        ON CONFLICT (post_id, user_id) DO NOTHING
        RETURNING post_id, user_id, created_at
        """,
        post_id,
        user_id,
    )


async def delete_like(pool: asyncpg.Pool, *, post_id: int, user_id: int) -> int:
    status = await db.execute(
        pool,
        """
        DELETE FROM likes
        WHERE post_id = $1
          AND user_id = $2
        """,
        post_id,
        user_id,
    )
    return db.affected_rows(status)
