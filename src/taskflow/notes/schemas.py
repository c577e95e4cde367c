"""Note and note-file Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NoteCreate(BaseModel):
    type: str | None = None
    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None
    attachments: list[dict[str, Any]] | None = None


class NoteUpdate(BaseModel):
    """Patch body. A note's type is fixed at creation."""

    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None
    attachments: list[dict[str, Any]] | None = None


class NoteResponse(BaseModel):
    id: int
    user_id: int | None = None
    type: str
    title: str
    content: str | None = None
    tags: list[str] = []
    attachments: list[dict[str, Any]] = []
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NoteFileUpload(BaseModel):
    """Inline file upload, camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    filename: str | None = None
    file_data: str | None = Field(None, alias="fileData")
    file_size: int | None = Field(None, alias="fileSize")
    mime_type: str | None = Field(None, alias="mimeType")


class NoteFileResponse(BaseModel):
    """File metadata; the payload itself is never echoed back."""

    id: int
    note_id: int
    filename: str
    original_name: str
    file_size: int | None = None
    mime_type: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
