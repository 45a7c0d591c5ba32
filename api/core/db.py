"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created by the FastAPI lifespan hook (see `api/main.py`), stored
on `app.state.db_pool`, and handed to route handlers through the `get_pool`
dependency. Repositories receive it as their first argument.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg
from fastapi import Request

from . import config
from .errors import DatabaseError, ForeignKeyViolation, UniqueViolation

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)

# Upper bound of the Postgres `integer` / `serial` columns used for ids.
PG_INT_MAX = 2_147_483_647


async def create_pool() -> asyncpg.Pool:
    params = config.database_params()
    pool = await asyncpg.create_pool(
        min_size=config.pool_min_size(),
        max_size=config.pool_max_size(),
        **params,
    )
    logger.info(
        "db_pool_ready min_size=%s max_size=%s",
        config.pool_min_size(),
        config.pool_max_size(),
    )
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()
    logger.info("db_pool_closed")


def get_pool(request: Request) -> asyncpg.Pool:
    pool = getattr(request.app.state, "db_pool", None)
    if pool is None:
        raise DatabaseError("DB pool is not initialized. The app lifespan must create it on startup.")
    return pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def _wrap(exc: Exception) -> DatabaseError:
    if isinstance(exc, asyncpg.UniqueViolationError):
        return UniqueViolation(str(exc))
    if isinstance(exc, asyncpg.ForeignKeyViolationError):
        return ForeignKeyViolation(str(exc))
    return DatabaseError(f"{type(exc).__name__}: {exc}")


async def fetch_one(pool: asyncpg.Pool, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    try:
        row = await pool.fetchrow(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise _wrap(exc) from exc
    return _record_to_dict(row) if row is not None else None


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    try:
        rows = await pool.fetch(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise _wrap(exc) from exc
    return [_record_to_dict(r) for r in rows]


async def execute(pool: asyncpg.Pool, sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return asyncpg's status
    string, e.g. "DELETE 1".
    """
    try:
        return await pool.execute(sql, *args)
    except _DRIVER_ERRORS as exc:
        raise _wrap(exc) from exc


def affected_rows(status: str) -> int:
    # asyncpg status strings end with the row count: "INSERT 0 1", "DELETE 3".
    tail = (status or "").rsplit(" ", 1)[-1]
    return int(tail) if tail.isdigit() else 0
