"""Time tracking router: /time-logs and /time-sessions endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.database import get_session
from taskflow.timetracking.schemas import (
    TimeLogCreate,
    TimeLogResponse,
    TimeSessionCreate,
    TimeSessionResponse,
)
from taskflow.timetracking.service import create_time_log, create_time_session, list_time_sessions

router = APIRouter(tags=["Time Tracking"])


@router.post("/time-logs", response_model=TimeLogResponse, status_code=status.HTTP_201_CREATED)
async def post_time_log(
    body: TimeLogCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> TimeLogResponse:
    log = await create_time_log(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    return TimeLogResponse.model_validate(log)


@router.get("/time-sessions", response_model=list[TimeSessionResponse])
async def get_time_sessions(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> list[TimeSessionResponse]:
    sessions = await list_time_sessions(db, identity.id)
    return [TimeSessionResponse.model_validate(s) for s in sessions]


@router.post("/time-sessions", response_model=TimeSessionResponse, status_code=status.HTTP_201_CREATED)
async def post_time_session(
    body: TimeSessionCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> TimeSessionResponse:
    session = await create_time_session(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    return TimeSessionResponse.model_validate(session)
