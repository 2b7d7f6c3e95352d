"""
Quick-task persistence (raw SQL).
"""

from __future__ import annotations

from fastapi import Depends

from core import db

_TASK_COLUMNS = "id, username, task, created_at"


class TaskRepository:
    def __init__(self, database: db.Database) -> None:
        self._db = database

    async def add_task(self, *, username: str, task: str) -> dict:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO quick_tasks (username, task)
            VALUES ($1, $2)
            RETURNING {_TASK_COLUMNS}
            """,
            username,
            task,
        )
        if row is None:
            raise RuntimeError("Failed to insert quick task.")
        return row

    async def list_tasks(self, *, username: str, limit: int = 100, offset: int = 0) -> list[dict]:
        return await self._db.fetch_all(
            f"""
            SELECT {_TASK_COLUMNS}
            FROM quick_tasks
            WHERE username = $1
            ORDER BY id DESC
            LIMIT $2 OFFSET $3
            """,
            username,
            limit,
            offset,
        )

    async def get_task(self, task_id: int) -> dict | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_TASK_COLUMNS}
            FROM quick_tasks
            WHERE id = $1
            """,
            task_id,
        )

    async def delete_task(self, *, task_id: int, username: str) -> bool:
        # Owner stays in the predicate; a mismatch deletes nothing.
        row = await self._db.fetch_one(
            """
            DELETE FROM quick_tasks
            WHERE id = $1
              AND username = $2
            RETURNING id
            """,
            task_id,
            username,
        )
        return row is not None


def get_task_repository(database: db.Database = Depends(db.get_database)) -> TaskRepository:
    return TaskRepository(database)
