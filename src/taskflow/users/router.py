"""Profile router: /profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.auth.schemas import ProfileResponse, ProfileUpdateRequest
from taskflow.database import get_session
from taskflow.users.service import get_profile, update_profile

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileResponse)
async def read_profile(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """Get own full profile."""
    user = await get_profile(db, identity.id)
    return ProfileResponse.model_validate(user)


@router.put("", response_model=ProfileResponse)
async def update_my_profile(
    body: ProfileUpdateRequest,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> ProfileResponse:
    """Update full name, email or photo. Fields left out of the body are kept."""
    user = await update_profile(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    return ProfileResponse.model_validate(user)
