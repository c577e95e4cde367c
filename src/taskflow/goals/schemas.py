"""Daily goal Pydantic schemas."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict


class DailyGoalCreate(BaseModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: str | None = None
    date: dt.date | None = None


class DailyGoalUpdate(BaseModel):
    """Patch body. ``status`` drives ``completed_at``."""

    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: str | None = None
    status: str | None = None


class DailyGoalResponse(BaseModel):
    id: int
    user_id: int | None = None
    title: str
    description: str | None = None
    category: str
    priority: str
    status: str
    date: dt.date
    completed_at: dt.datetime | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)
