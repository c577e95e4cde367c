"""Notes router: /notes and /files endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.database import get_session
from taskflow.notes.schemas import NoteCreate, NoteFileResponse, NoteFileUpload, NoteResponse, NoteUpdate
from taskflow.notes.service import (
    add_file,
    create_note,
    delete_file,
    delete_note,
    list_files,
    list_notes,
    update_note,
)
from taskflow.schemas import SuccessResponse

router = APIRouter(tags=["Notes"])


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


@router.get("/notes", response_model=list[NoteResponse])
async def get_notes(
    type: str | None = None,  # noqa: A002
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> list[NoteResponse]:
    """List notes, most recently edited first, optionally by type."""
    notes = await list_notes(db, identity.id, type)
    return [NoteResponse.model_validate(n) for n in notes]


@router.post("/notes", response_model=NoteResponse)
async def post_note(
    body: NoteCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> NoteResponse:
    note = await create_note(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    return NoteResponse.model_validate(note)


@router.put("/notes/{note_id}", response_model=NoteResponse)
async def put_note(
    note_id: int,
    body: NoteUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> NoteResponse:
    note = await update_note(db, identity.id, note_id, body.model_dump(exclude_unset=True))
    await db.commit()
    return NoteResponse.model_validate(note)


@router.delete("/notes/{note_id}", response_model=SuccessResponse)
async def remove_note(
    note_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    await delete_note(db, identity.id, note_id)
    await db.commit()
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


@router.post("/notes/{note_id}/files", response_model=NoteFileResponse)
async def upload_file(
    note_id: int,
    body: NoteFileUpload,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> NoteFileResponse:
    stored = await add_file(
        db,
        identity.id,
        note_id,
        filename=body.filename,
        file_data=body.file_data,
        file_size=body.file_size,
        mime_type=body.mime_type,
    )
    await db.commit()
    return NoteFileResponse.model_validate(stored)


@router.get("/notes/{note_id}/files", response_model=list[NoteFileResponse])
async def get_files(
    note_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> list[NoteFileResponse]:
    files = await list_files(db, identity.id, note_id)
    return [NoteFileResponse.model_validate(f) for f in files]


@router.delete("/files/{file_id}", response_model=SuccessResponse)
async def remove_file(
    file_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    await delete_file(db, identity.id, file_id)
    await db.commit()
    return SuccessResponse()
