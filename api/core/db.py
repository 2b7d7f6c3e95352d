"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. `main.create_app` builds one instance per
application, stores it on `app.state.db`, connects it on startup and closes it
on shutdown. Repositories receive it through `get_database`.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

logger = logging.getLogger(__name__)

# Upper bound of BIGSERIAL ids and of LIMIT/OFFSET values.
BIGINT_MAX = 2**63 - 1

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id BIGSERIAL PRIMARY KEY,
        username TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        is_admin BOOLEAN NOT NULL DEFAULT false,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS logs (
        id BIGSERIAL PRIMARY KEY,
        username TEXT NOT NULL,
        device_id TEXT,
        activity TEXT NOT NULL,
        timestamp TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS logs_username_timestamp_idx
    ON logs (username, timestamp DESC, id DESC)
    """,
    """
    CREATE INDEX IF NOT EXISTS logs_device_id_idx
    ON logs (device_id)
    """,
    """
    CREATE TABLE IF NOT EXISTS quick_tasks (
        id BIGSERIAL PRIMARY KEY,
        username TEXT NOT NULL,
        task TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT now()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS quick_tasks_username_idx
    ON quick_tasks (username, id DESC)
    """,
)


def sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30.0,
    ) -> None:
        self._dsn = sanitize_database_url(dsn)
        self._min_size = min_size
        self._max_size = max_size
        self._timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        self._pool = await asyncpg.create_pool(
            dsn=self._dsn,
            min_size=self._min_size,
            max_size=self._max_size,
            command_timeout=self._timeout,
        )
        logger.info("db_pool_opened min_size=%s max_size=%s", self._min_size, self._max_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None
        logger.info("db_pool_closed")

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    async def ensure_schema(self) -> None:
        async with self.pool().acquire(timeout=self._timeout) as conn:
            async with conn.transaction():
                for statement in SCHEMA_STATEMENTS:
                    await conn.execute(statement, timeout=self._timeout)

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool().fetchrow(sql, *args, timeout=self._timeout)
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self.pool().fetch(sql, *args, timeout=self._timeout)
        return [dict(r) for r in rows]


def get_database(request: Request) -> Database:
    return request.app.state.db
