"""Dashboard endpoints: overview and realtime connection stats."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.dashboard.schemas import DashboardOverviewResponse
from taskflow.dashboard.service import get_overview
from taskflow.database import get_session

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/overview", response_model=DashboardOverviewResponse)
async def dashboard_overview(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> DashboardOverviewResponse:
    """Today's task counts, open work, overdue count, time logged and recent open tasks."""
    return await get_overview(db, identity.id)


@router.get("/ws-stats")
async def ws_stats(request: Request) -> dict:
    """WebSocket connection statistics (unauthenticated, for monitoring)."""
    return request.app.state.channels.get_stats()
