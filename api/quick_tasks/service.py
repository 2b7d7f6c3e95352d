"""
Quick-task business logic.
"""

from __future__ import annotations

import logging

from auth import policy
from core import errors

from . import schemas
from .repository import TaskRepository

logger = logging.getLogger(__name__)


def _to_task(row: dict) -> schemas.QuickTaskResponse:
    return schemas.QuickTaskResponse(
        id=int(row["id"]),
        username=str(row["username"]),
        task=str(row["task"]),
        created_at=row.get("created_at"),
    )


async def add_task(
    payload: schemas.AddTaskRequest,
    *,
    current_user: dict,
    tasks: TaskRepository,
) -> schemas.AddTaskResponse:
    text = (payload.task or "").strip()
    if not text:
        raise errors.BadRequest("Missing required fields: task")

    row = await tasks.add_task(username=str(current_user["username"]), task=text)
    logger.info("quick_task_added id=%s user_id=%s", row["id"], current_user["id"])
    return schemas.AddTaskResponse(message="Task added", task=_to_task(row))


async def list_tasks(
    *,
    current_user: dict,
    tasks: TaskRepository,
    limit: int = 100,
    offset: int = 0,
) -> list[schemas.QuickTaskResponse]:
    rows = await tasks.list_tasks(username=str(current_user["username"]), limit=limit, offset=offset)
    return [_to_task(row) for row in rows]


async def delete_task(
    task_id: int,
    *,
    current_user: dict,
    tasks: TaskRepository,
) -> schemas.MessageResponse:
    row = await tasks.get_task(task_id)
    if row is None:
        raise errors.NotFound("Task not found")

    policy.ensure_task_owner(current_user, row)

    deleted = await tasks.delete_task(task_id=task_id, username=str(current_user["username"]))
    if not deleted:
        raise errors.NotFound("Task not found")

    logger.info("quick_task_deleted id=%s user_id=%s", task_id, current_user["id"])
    return schemas.MessageResponse(message="Task deleted")
