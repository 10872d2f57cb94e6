"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI opens it on startup and closes
it on shutdown (see `api/main.py`). Connection settings come from
`core/settings.py`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from typing import Any

import asyncpg

from . import settings

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    min_size = settings.db_pool_min_size()
    max_size = settings.db_pool_max_size()
    _pool = await asyncpg.create_pool(
        dsn=settings.database_url(),
        min_size=min_size,
        max_size=max_size,
        command_timeout=settings.db_command_timeout_s(),
    )
    logger.info("db_pool_opened min_size=%s max_size=%s", min_size, max_size)


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None
    logger.info("db_pool_closed")


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool().fetchrow(sql, *args)
    return dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool().fetch(sql, *args)
    return [dict(r) for r in rows]
