"""Learning progress router: /learning/progress endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.database import get_session
from taskflow.learning.schemas import (
    LearningProgressCreate,
    LearningProgressResponse,
    LearningProgressUpdate,
)
from taskflow.learning.service import create_progress, delete_progress, list_progress, update_progress
from taskflow.schemas import SuccessResponse

router = APIRouter(prefix="/learning/progress", tags=["Learning"])


@router.get("", response_model=list[LearningProgressResponse])
async def get_progress(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> list[LearningProgressResponse]:
    entries = await list_progress(db, identity.id)
    return [LearningProgressResponse.model_validate(e) for e in entries]


@router.post("", response_model=LearningProgressResponse)
async def post_progress(
    body: LearningProgressCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> LearningProgressResponse:
    entry = await create_progress(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    return LearningProgressResponse.model_validate(entry)


@router.put("/{entry_id}", response_model=LearningProgressResponse)
async def put_progress(
    entry_id: int,
    body: LearningProgressUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> LearningProgressResponse:
    """Patch an entry; also records it as practiced now."""
    entry = await update_progress(db, identity.id, entry_id, body.model_dump(exclude_unset=True))
    await db.commit()
    return LearningProgressResponse.model_validate(entry)


@router.delete("/{entry_id}", response_model=SuccessResponse)
async def remove_progress(
    entry_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    await delete_progress(db, identity.id, entry_id)
    await db.commit()
    return SuccessResponse()
