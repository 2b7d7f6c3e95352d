"""
Activity log API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies
from core import db

from . import schemas, service
from .repository import LogRepository, get_log_repository

router = APIRouter()


@router.post("/logs")
async def append_log(
    request: schemas.AppendLogRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
    logs: LogRepository = Depends(get_log_repository),
) -> schemas.AppendLogResponse:
    return await service.append_log(request, current_user=current_user, logs=logs)


@router.get("/logs/user/{username}")
async def list_user_logs(
    username: str,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0, le=db.BIGINT_MAX),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    logs: LogRepository = Depends(get_log_repository),
) -> list[schemas.LogEntryResponse]:
    return await service.list_user_logs(
        username,
        current_user=current_user,
        logs=logs,
        limit=limit,
        offset=offset,
    )


@router.get("/logs/device/{device_id}")
async def list_device_logs(
    device_id: str,
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0, le=db.BIGINT_MAX),
    current_user: dict = Depends(auth_dependencies.get_current_user),
    logs: LogRepository = Depends(get_log_repository),
) -> list[schemas.LogEntryResponse]:
    return await service.list_device_logs(
        device_id,
        current_user=current_user,
        logs=logs,
        limit=limit,
        offset=offset,
    )


@router.get("/admin/logs")
async def list_all_logs(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0, le=db.BIGINT_MAX),
    current_user: dict = Depends(auth_dependencies.get_admin_user),
    logs: LogRepository = Depends(get_log_repository),
) -> list[schemas.LogEntryResponse]:
    return await service.list_all_logs(current_user=current_user, logs=logs, limit=limit, offset=offset)
