"""
Pydantic schemas for quick-task endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AddTaskRequest(BaseModel):
    task: str = Field(..., min_length=1, max_length=2_000)


class QuickTaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    task: str
    created_at: datetime | None = Field(default=None, alias="createdAt")


class AddTaskResponse(BaseModel):
    message: str
    task: QuickTaskResponse


class MessageResponse(BaseModel):
    message: str
