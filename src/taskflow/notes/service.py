"""Note and note-file business logic."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, select

from taskflow.db.models import Note, NoteFile, utcnow
from taskflow.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

NOTE_TYPES = ("learning", "working")


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


async def list_notes(db: AsyncSession, user_id: int, note_type: str | None = None) -> list[Note]:
    query = select(Note).where(Note.user_id == user_id)
    if note_type:
        query = query.where(Note.type == note_type)
    result = await db.execute(query.order_by(Note.updated_at.desc(), Note.id.desc()))
    return list(result.scalars().all())


async def get_note(db: AsyncSession, user_id: int, note_id: int) -> Note:
    result = await db.execute(select(Note).where(Note.id == note_id, Note.user_id == user_id))
    note = result.scalar_one_or_none()
    if note is None:
        msg = "Note not found"
        raise NotFoundError(msg)
    return note


async def create_note(db: AsyncSession, user_id: int, data: dict[str, Any]) -> Note:
    if data.get("type") not in NOTE_TYPES or not data.get("title"):
        msg = "Valid type and title are required"
        raise ValidationError(msg)

    note = Note(
        user_id=user_id,
        type=data["type"],
        title=data["title"],
        content=data.get("content") or "",
        tags=data.get("tags") or [],
        attachments=data.get("attachments") or [],
    )
    db.add(note)
    await db.flush()
    return note


async def update_note(db: AsyncSession, user_id: int, note_id: int, changes: dict[str, Any]) -> Note:
    if "title" in changes and not changes["title"]:
        msg = "Title cannot be empty"
        raise ValidationError(msg)

    note = await get_note(db, user_id, note_id)
    for name, value in changes.items():
        if name in ("tags", "attachments") and value is None:
            value = []
        setattr(note, name, value)
    note.updated_at = utcnow()
    await db.flush()
    return note


async def delete_note(db: AsyncSession, user_id: int, note_id: int) -> None:
    result = await db.execute(delete(Note).where(Note.id == note_id, Note.user_id == user_id))
    if not result.rowcount:
        msg = "Note not found"
        raise NotFoundError(msg)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


async def add_file(
    db: AsyncSession,
    user_id: int,
    note_id: int,
    filename: str | None,
    file_data: str | None,
    file_size: int | None = None,
    mime_type: str | None = None,
) -> NoteFile:
    """Attach an inline file to one of the user's notes."""
    if not filename or not file_data:
        msg = "Filename and file data are required"
        raise ValidationError(msg)
    await get_note(db, user_id, note_id)

    stored = NoteFile(
        note_id=note_id,
        user_id=user_id,
        filename=filename,
        original_name=filename,
        data=file_data,
        file_size=file_size,
        mime_type=mime_type,
    )
    db.add(stored)
    await db.flush()
    logger.info("note_file_added", user_id=user_id, note_id=note_id, file_id=stored.id, size=file_size)
    return stored


async def list_files(db: AsyncSession, user_id: int, note_id: int) -> list[NoteFile]:
    """Files attached to a note, newest first."""
    await get_note(db, user_id, note_id)
    result = await db.execute(
        select(NoteFile)
        .where(NoteFile.note_id == note_id, NoteFile.user_id == user_id)
        .order_by(NoteFile.created_at.desc(), NoteFile.id.desc())
    )
    return list(result.scalars().all())


async def delete_file(db: AsyncSession, user_id: int, file_id: int) -> None:
    result = await db.execute(delete(NoteFile).where(NoteFile.id == file_id, NoteFile.user_id == user_id))
    if not result.rowcount:
        msg = "File not found"
        raise NotFoundError(msg)
