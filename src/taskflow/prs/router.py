"""PR tracker router: /prs endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.database import get_session
from taskflow.prs.schemas import PullRequestCreate, PullRequestResponse, PullRequestUpdate
from taskflow.prs.service import create_pr, delete_pr, export_csv, list_prs, update_pr
from taskflow.schemas import SuccessResponse

router = APIRouter(prefix="/prs", tags=["Pull Requests"])


@router.get("", response_model=list[PullRequestResponse])
async def get_prs(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> list[PullRequestResponse]:
    prs = await list_prs(db, identity.id)
    return [PullRequestResponse.model_validate(p) for p in prs]


@router.get("/download")
async def download_prs(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> Response:
    """Download all PRs as a CSV attachment (needs at least 10)."""
    content = await export_csv(db, identity.id)
    filename = f"prs-{int(time.time() * 1000)}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=PullRequestResponse)
async def post_pr(
    body: PullRequestCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> PullRequestResponse:
    pr = await create_pr(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    return PullRequestResponse.model_validate(pr)


@router.put("/{pr_id}", response_model=PullRequestResponse)
async def put_pr(
    pr_id: int,
    body: PullRequestUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> PullRequestResponse:
    pr = await update_pr(db, identity.id, pr_id, body.model_dump(exclude_unset=True))
    await db.commit()
    return PullRequestResponse.model_validate(pr)


@router.delete("/{pr_id}", response_model=SuccessResponse)
async def remove_pr(
    pr_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    await delete_pr(db, identity.id, pr_id)
    await db.commit()
    return SuccessResponse()
