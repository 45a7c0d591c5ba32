"""
Password hashing (bcrypt) and access-token signing (PyJWT).

Signing settings come from `core.config`.
"""

from __future__ import annotations

import time
from typing import Any

import bcrypt
import jwt

from core import config

# bcrypt only looks at the first 72 bytes; newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


class PasswordTooLongError(AuthSecurityError):
    pass


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    if len(password) > MAX_PASSWORD_BYTES:
        raise PasswordTooLongError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")
    try:
        return bcrypt.hashpw(password, bcrypt.gensalt()).decode("utf-8")
    except ValueError as exc:
        raise AuthSecurityError(str(exc)) from exc


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed or len(password) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(*, user_id: int, username: str) -> str:
    issued_at = int(time.time())
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "type": "access",
        "iat": issued_at,
    }

    lifetime_min = config.access_token_expire_minutes()
    if lifetime_min > 0:
        claims["exp"] = issued_at + lifetime_min * 60

    return jwt.encode(claims, config.jwt_secret(), algorithm=config.jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        claims = jwt.decode(raw, config.jwt_secret(), algorithms=[config.jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    if str(claims.get("type") or "").strip().lower() != "access":
        raise AuthSecurityError("Token is not an access token.")

    return claims
