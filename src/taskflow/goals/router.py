"""Daily goals router: /daily-goals endpoints."""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.database import get_session
from taskflow.goals.schemas import DailyGoalCreate, DailyGoalResponse, DailyGoalUpdate
from taskflow.goals.service import create_goal, delete_goal, list_goals, update_goal
from taskflow.schemas import MessageResponse

router = APIRouter(prefix="/daily-goals", tags=["Daily Goals"])


@router.get("", response_model=list[DailyGoalResponse])
async def get_goals(
    date: dt.date | None = None,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> list[DailyGoalResponse]:
    """Goals for one day; defaults to today (UTC)."""
    goals = await list_goals(db, identity.id, date)
    return [DailyGoalResponse.model_validate(g) for g in goals]


@router.post("", response_model=DailyGoalResponse, status_code=status.HTTP_201_CREATED)
async def post_goal(
    body: DailyGoalCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> DailyGoalResponse:
    goal = await create_goal(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    return DailyGoalResponse.model_validate(goal)


@router.put("/{goal_id}", response_model=DailyGoalResponse)
async def put_goal(
    goal_id: int,
    body: DailyGoalUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> DailyGoalResponse:
    goal = await update_goal(db, identity.id, goal_id, body.model_dump(exclude_unset=True))
    await db.commit()
    return DailyGoalResponse.model_validate(goal)


@router.delete("/{goal_id}", response_model=MessageResponse)
async def remove_goal(
    goal_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    await delete_goal(db, identity.id, goal_id)
    await db.commit()
    return MessageResponse(message="Daily goal deleted successfully")
