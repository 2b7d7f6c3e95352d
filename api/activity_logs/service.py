"""
Activity log business logic.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from auth import policy
from core import errors

from . import schemas
from .repository import LogRepository

logger = logging.getLogger(__name__)


def _to_log_entry(row: dict) -> schemas.LogEntryResponse:
    return schemas.LogEntryResponse(
        id=int(row["id"]),
        username=str(row["username"]),
        device_id=row.get("device_id"),
        activity=str(row["activity"]),
        timestamp=row["timestamp"],
    )


def _normalize_timestamp(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def append_log(
    payload: schemas.AppendLogRequest,
    *,
    current_user: dict,
    logs: LogRepository,
) -> schemas.AppendLogResponse:
    activity = (payload.activity or "").strip()
    if not activity:
        raise errors.BadRequest("Missing required fields: activity")

    device_id = (payload.device_id or "").strip() or None
    row = await logs.append_log(
        username=str(current_user["username"]),
        activity=activity,
        device_id=device_id,
        timestamp=_normalize_timestamp(payload.timestamp),
    )
    logger.info("log_appended id=%s user_id=%s device_id=%s", row["id"], current_user["id"], device_id)
    return schemas.AppendLogResponse(message="Activity logged successfully", log=_to_log_entry(row))


async def list_user_logs(
    username: str,
    *,
    current_user: dict,
    logs: LogRepository,
    limit: int = 100,
    offset: int = 0,
) -> list[schemas.LogEntryResponse]:
    policy.ensure_can_read_user_logs(current_user, username)
    rows = await logs.list_logs(username=username, limit=limit, offset=offset)
    return [_to_log_entry(row) for row in rows]


async def list_all_logs(
    *,
    current_user: dict,
    logs: LogRepository,
    limit: int = 100,
    offset: int = 0,
) -> list[schemas.LogEntryResponse]:
    policy.ensure_admin(current_user)
    rows = await logs.list_all_logs(limit=limit, offset=offset)
    return [_to_log_entry(row) for row in rows]


async def list_device_logs(
    device_id: str,
    *,
    current_user: dict,
    logs: LogRepository,
    limit: int = 100,
    offset: int = 0,
) -> list[schemas.LogEntryResponse]:
    """
    Admins see every user's entries for the device; everyone else only their own.
    """
    owner = None if policy.is_admin(current_user) else str(current_user["username"])
    rows = await logs.list_device_logs(device_id=device_id, username=owner, limit=limit, offset=offset)
    return [_to_log_entry(row) for row in rows]
