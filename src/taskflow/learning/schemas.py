"""Learning progress Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class LearningProgressCreate(BaseModel):
    subject: str | None = None
    topic: str | None = None
    skill_level: str | None = None
    hours_spent: int | None = None
    progress_percentage: int | None = None
    notes: str | None = None


class LearningProgressUpdate(LearningProgressCreate):
    """Patch body."""


class LearningProgressResponse(BaseModel):
    id: int
    user_id: int | None = None
    subject: str
    topic: str | None = None
    skill_level: str | None = None
    hours_spent: int | None = None
    progress_percentage: int | None = None
    last_practiced: datetime | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
