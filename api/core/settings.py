"""
Environment-driven settings.

Every value is read on call so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

DEFAULT_RESPONSE_WRAPPER = "data"
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's sslmode query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


def db_pool_min_size() -> int:
    return max(1, env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), env_int("DB_POOL_MAX_SIZE", 5))


def db_command_timeout_s() -> float:
    return env_float("DB_COMMAND_TIMEOUT_S", 30.0)


def response_wrapper() -> str | None:
    """
    Top-level key for transformed responses. Set RESPONSE_WRAPPER="" to disable.
    """
    raw = os.environ.get("RESPONSE_WRAPPER")
    if raw is None:
        return DEFAULT_RESPONSE_WRAPPER
    return raw.strip() or None


def documents_max_limit() -> int:
    return max(1, env_int("DOCUMENTS_MAX_LIMIT", 500))


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
