"""Study sessions router: /study-sessions endpoints."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.database import get_session
from taskflow.schemas import MessageResponse
from taskflow.study.schemas import StudySessionCreate, StudySessionResponse, StudySessionUpdate
from taskflow.study.service import create_session, delete_session, list_sessions, update_session

router = APIRouter(prefix="/study-sessions", tags=["Study Sessions"])


@router.get("", response_model=list[StudySessionResponse])
async def get_study_sessions(
    date: dt.date | None = None,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> list[StudySessionResponse]:
    """Sessions newest first; ``date`` restricts to sessions that started that day (UTC)."""
    sessions = await list_sessions(db, identity.id, date)
    return [StudySessionResponse.model_validate(s) for s in sessions]


@router.post("", response_model=StudySessionResponse, status_code=status.HTTP_201_CREATED)
async def post_study_session(
    body: StudySessionCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> StudySessionResponse:
    session = await create_session(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    return StudySessionResponse.model_validate(session)


@router.put("/{session_id}", response_model=StudySessionResponse)
async def put_study_session(
    session_id: int,
    body: StudySessionUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> StudySessionResponse:
    session = await update_session(db, identity.id, session_id, body.model_dump(exclude_unset=True))
    await db.commit()
    return StudySessionResponse.model_validate(session)


@router.delete("/{session_id}", response_model=MessageResponse)
async def remove_study_session(
    session_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    await delete_session(db, identity.id, session_id)
    await db.commit()
    return MessageResponse(message="Study session deleted successfully")
