"""Task Pydantic schemas."""

from __future__ import annotations

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict


class TaskCreate(BaseModel):
    title: str | None = None
    status: str | None = None
    description: str | None = None
    priority: str | None = None
    due_date: date | None = None
    due_time: time | None = None
    category: str | None = None
    type: str | None = None
    project_id: int | None = None
    important: bool | None = None
    assigned_to: str | None = None


class TaskUpdate(TaskCreate):
    """Patch body. Only fields present in the request are applied."""


class TaskResponse(BaseModel):
    id: int
    user_id: int | None = None
    title: str
    status: str
    description: str | None = None
    priority: str | None = None
    due_date: date | None = None
    due_time: time | None = None
    category: str | None = None
    type: str | None = None
    project_id: int | None = None
    important: bool = False
    assigned_to: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskFilters(BaseModel):
    """Query-string filters for the task list."""

    status: str | None = None
    priority: str | None = None
    category: str | None = None
    type: str | None = None
    project_id: int | None = None
    important: str | None = None
    q: str | None = None
    sort: str = "id"
    order: str = "asc"
