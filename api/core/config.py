"""
Environment-driven settings.

Every value is read lazily so tests (and the lifespan hook) see the current
environment rather than whatever was set at import time.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    # asyncpg rejects libpq-only options such as sslmode.
    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str | None:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        return None
    return _sanitize_database_url(url)


def database_params() -> dict:
    """
    Connection keyword arguments for asyncpg.

    `DATABASE_URL` wins when present; otherwise the discrete `DB_*`
    variables are used.
    """
    url = database_url()
    if url is not None:
        return {"dsn": url}

    name = _env_str("DB_NAME")
    if not name:
        raise RuntimeError("Set DATABASE_URL or DB_HOST/DB_USER/DB_PASSWORD/DB_NAME.")

    return {
        "host": _env_str("DB_HOST", "localhost"),
        "port": _env_int("DB_PORT", 5432),
        "user": _env_str("DB_USER", "postgres"),
        "password": os.environ.get("DB_PASSWORD", ""),
        "database": name,
    }


def pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 10), 1)


def listen_host() -> str:
    return _env_str("HOST", "0.0.0.0")


def listen_port() -> int:
    return _env_int("PORT", 3000)


def log_level() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return _env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def access_token_expire_minutes() -> int:
    """
    0 (the default) issues tokens without an `exp` claim.
    """
    return max(_env_int("ACCESS_TOKEN_EXPIRE_MIN", 0), 0)
