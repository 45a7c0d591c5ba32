"""
Auth dependencies for protected FastAPI routes.

Every route except signup and login declares `get_current_user`; a request
without a valid bearer token never reaches the handler.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import schemas, service


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise unauthorized("Missing Authorization header.")

    parts = raw.split(None, 1)
    if len(parts) != 2:
        raise unauthorized("Invalid Authorization header format.")

    scheme, token = parts[0].lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise unauthorized("Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(access_token: str = Depends(get_bearer_token)) -> schemas.AuthenticatedUser:
    try:
        return service.get_user_from_access_token(access_token)
    except service.InvalidTokenError as exc:
        raise unauthorized(str(exc)) from exc
