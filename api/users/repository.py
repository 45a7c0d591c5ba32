"""
User and follow-graph persistence (raw SQL).
"""

from __future__ import annotations

import asyncpg

from core import db

_PUBLIC_COLUMNS = "id, username, name, created_at"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def create_user(pool: asyncpg.Pool, *, username: str, password_hash: str, name: str) -> dict:
    row = await db.fetch_one(
        pool,
        f"""
        INSERT INTO users (username, password, name)
        VALUES ($1, $2, $3)
        RETURNING {_PUBLIC_COLUMNS}
        """,
        username,
        password_hash,
        name,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_username(pool: asyncpg.Pool, username: str) -> dict | None:
    return await db.fetch_one(
        pool,
        f"""
        SELECT {_PUBLIC_COLUMNS}, password
        FROM users
        WHERE username = $1
        """,
        username,
    )


async def get_user_by_id(pool: asyncpg.Pool, user_id: int) -> dict | None:
    return await db.fetch_one(
        pool,
        f"""
        SELECT {_PUBLIC_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def list_users(pool: asyncpg.Pool) -> list[dict]:
    return await db.fetch_all(
        pool,
        f"""
        SELECT {_PUBLIC_COLUMNS}
        FROM users
        ORDER BY id ASC
        """
    )


async def search_users_by_name(pool: asyncpg.Pool, name: str) -> list[dict]:
    return await db.fetch_all(
        pool,
        """
        SELECT name, username
        FROM users
        WHERE name ILIKE ('%' || $1 || '%')
        ORDER BY name ASC, username ASC
        """,
        _escape_like(name),
    )


async def insert_follow(pool: asyncpg.Pool, *, follower_id: int, following_id: int) -> dict:
    row = await db.fetch_one(
        pool,
        """
        INSERT INTO followers (follower_id, following_id)
        VALUES ($1, $2)
        RETURNING follower_id, following_id, created_at
        """,
        follower_id,
        following_id,
    )
    if row is None:
        raise RuntimeError("Failed to insert follow edge.")
    return row


async def list_following_ids(pool: asyncpg.Pool, follower_id: int) -> list[int]:
    rows = await db.fetch_all(
        pool,
        """
        SELECT DISTINCT following_id
        FROM followers
        WHERE follower_id = $1
        """,
        follower_id,
    )
    return [int(r["following_id"]) for r in rows]
