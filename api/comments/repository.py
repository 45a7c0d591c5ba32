"""
Comment persistence (raw SQL).
"""

from __future__ import annotations

import asyncpg

from core import db

_COLUMNS = "comment_id, post_id, user_id, content, created_at"


async def list_comments_for_post(pool: asyncpg.Pool, post_id: int) -> list[dict]:
    return await db.fetch_all(
        pool,
        f"""
        SELECT {_COLUMNS}
        FROM comments
        WHERE post_id = $1
        ORDER BY created_at ASC, comment_id ASC
        """,
        post_id,
    )


async def insert_comment(pool: asyncpg.Pool, *, post_id: int, user_id: int, content: str) -> dict:
    row = await db.fetch_one(
        pool,
        f"""
        INSERT INTO comments (post_id, user_id, content)
        VALUES ($1, $2, $3)
        RETURNING {_COLUMNS}
        """,
        post_id,
        user_id,
        content,
    )
    if row is None:
        raise RuntimeError("Failed to insert comment.")
    return row


async def delete_comment_owned_by(pool: asyncpg.Pool, comment_id: int, *, user_id: int) -> dict | None:
    return await db.fetch_one(
        pool,
        """
        DELETE FROM comments
        WHERE comment_id = $1
          AND user_id = $2
        RETURNING comment_id
        """,
        comment_id,
        user_id,
    )
