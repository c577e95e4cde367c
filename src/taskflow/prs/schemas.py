"""Pull-request tracker Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PullRequestCreate(BaseModel):
    title: str | None = None
    frontend_status: str | None = None
    backend_status: str | None = None
    frontend_link: str | None = None
    backend_link: str | None = None


class PullRequestUpdate(PullRequestCreate):
    """Patch body."""


class PullRequestResponse(BaseModel):
    id: int
    user_id: int | None = None
    title: str
    frontend_status: str
    backend_status: str
    frontend_link: str | None = None
    backend_link: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
