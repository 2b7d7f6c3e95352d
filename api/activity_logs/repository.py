"""
Activity log persistence (raw SQL).

Logs are append-only: there is no update or delete statement here.
"""

from __future__ import annotations

from datetime import datetime

from fastapi import Depends

from core import db

_LOG_COLUMNS = "id, username, device_id, activity, timestamp"


class LogRepository:
    def __init__(self, database: db.Database) -> None:
        self._db = database

    async def append_log(
        self,
        *,
        username: str,
        activity: str,
        device_id: str | None = None,
        timestamp: datetime | None = None,
    ) -> dict:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO logs (username, device_id, activity, timestamp)
            VALUES ($1, $2, $3, COALESCE($4, now()))
            RETURNING {_LOG_COLUMNS}
            """,
            username,
            device_id,
            activity,
            timestamp,
        )
        if row is None:
            raise RuntimeError("Failed to insert log.")
        return row

    async def list_logs(self, *, username: str, limit: int = 100, offset: int = 0) -> list[dict]:
        return await self._db.fetch_all(
            f"""
            SELECT {_LOG_COLUMNS}
            FROM logs
            WHERE username = $1
            ORDER BY timestamp DESC, id DESC
            LIMIT $2 OFFSET $3
            """,
            username,
            limit,
            offset,
        )

    async def list_all_logs(self, *, limit: int = 100, offset: int = 0) -> list[dict]:
        return await self._db.fetch_all(
            f"""
            SELECT {_LOG_COLUMNS}
            FROM logs
            ORDER BY timestamp DESC, id DESC
            LIMIT $1 OFFSET $2
            """,
            limit,
            offset,
        )

    async def list_device_logs(
        self,
        *,
        device_id: str,
        username: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict]:
        """
        Logs recorded for one device, optionally restricted to one owner.
        """
        return await self._db.fetch_all(
            f"""
            SELECT {_LOG_COLUMNS}
            FROM logs
            WHERE device_id = $1
              AND ($2::text IS NULL OR username = $2)
            ORDER BY timestamp DESC, id DESC
            LIMIT $3 OFFSET $4
            """,
            device_id,
            username,
            limit,
            offset,
        )


def get_log_repository(database: db.Database = Depends(db.get_database)) -> LogRepository:
    return LogRepository(database)
