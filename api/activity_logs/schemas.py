"""
Pydantic schemas for activity log endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AppendLogRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activity: str = Field(..., min_length=1, max_length=10_000)
    device_id: str | None = Field(default=None, alias="deviceId", min_length=1, max_length=200)
    timestamp: datetime | None = None


class LogEntryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    device_id: str | None = Field(default=None, alias="deviceId")
    activity: str
    timestamp: datetime


class AppendLogResponse(BaseModel):
    message: str
    log: LogEntryResponse
