"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the process-wide connection pool. The API opens it in its
lifespan (see `api/main.py`), the ingestion CLI around a single run.

Handlers never reach for the pool directly: routers receive it through
`Depends(db.pool)`, so tests can swap in a substitute via
`app.dependency_overrides[db.pool]`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Every helper takes an executor (a pool or an acquired connection) and turns
driver failures into `DatabaseError`.
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Any, Iterator, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import settings

Executor = Union[asyncpg.Pool, asyncpg.Connection]

_pool: asyncpg.Pool | None = None


class DatabaseError(RuntimeError):
    """Storage is unreachable or a statement failed."""


_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except _DRIVER_ERRORS as exc:
        raise DatabaseError(f"{type(exc).__name__}: {exc}") from exc


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    url = settings.env_str("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL is not set.")
    return _sanitize_database_url(url)


async def init_pool() -> asyncpg.Pool:
    global _pool
    if _pool is not None:
        return _pool
    with _translate_errors():
        _pool = await asyncpg.create_pool(
            dsn=database_url(),
            min_size=settings.env_int("DB_POOL_MIN_SIZE", 1),
            max_size=settings.env_int("DB_POOL_MAX_SIZE", 5),
            command_timeout=settings.env_int("DB_COMMAND_TIMEOUT", 30),
        )
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    pool_, _pool = _pool, None
    await pool_.close()


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise DatabaseError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(executor: Executor, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    with _translate_errors():
        row = await executor.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(executor: Executor, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    with _translate_errors():
        rows = await executor.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def fetch_value(executor: Executor, sql: str, *args: Any) -> Any:
    with _translate_errors():
        return await executor.fetchval(sql, *args)


async def execute(executor: Executor, sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return the status tag,
    e.g. "INSERT 0 1".
    """
    with _translate_errors():
        return await executor.execute(sql, *args)
