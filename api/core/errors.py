"""
Infrastructure error types.

Database failures are explicit and separable from request validation errors:
services raise `HTTPException` for client mistakes, while anything that goes
wrong talking to Postgres surfaces as `DatabaseError` and is turned into a
generic 500 by the handler registered in `main.py`.
"""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DatabaseError(RuntimeError):
    pass


class UniqueViolation(DatabaseError):
    pass


class ForeignKeyViolation(DatabaseError):
    pass


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(
        "database_error method=%s path=%s error=%s",
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error."},
    )
