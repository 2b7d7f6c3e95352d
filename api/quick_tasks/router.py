"""
Quick-task API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query

from auth import dependencies as auth_dependencies
from core import db

from . import schemas, service
from .repository import TaskRepository, get_task_repository

router = APIRouter(prefix="/quick-tasks")


@router.get("")
async def list_tasks(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0, le=db.BIGINT_MAX),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> list[schemas.QuickTaskResponse]:
    return await service.list_tasks(current_user=current_user, tasks=tasks, limit=limit, offset=offset)


@router.post("")
async def add_task(
    request: schemas.AddTaskRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> schemas.AddTaskResponse:
    return await service.add_task(request, current_user=current_user, tasks=tasks)


@router.delete("/{task_id}")
async def delete_task(
    task_id: int = Path(..., ge=1, le=db.BIGINT_MAX),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
) -> schemas.MessageResponse:
    return await service.delete_task(task_id, current_user=current_user, tasks=tasks)
