"""Study session Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class StudySessionCreate(BaseModel):
    subject: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration: int | None = None
    focus_rating: int | None = None
    notes: str | None = None


class StudySessionUpdate(BaseModel):
    """Patch body. Null values leave the stored value unchanged."""

    subject: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_minutes: int | None = None
    focus_rating: int | None = None
    notes: str | None = None


class StudySessionResponse(BaseModel):
    id: int
    user_id: int | None = None
    subject: str
    start_time: datetime
    end_time: datetime | None = None
    duration_minutes: int | None = None
    focus_rating: int
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
