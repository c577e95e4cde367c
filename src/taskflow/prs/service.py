"""Pull-request tracker business logic and CSV export."""

from __future__ import annotations

import csv
import io
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, select

from taskflow.db.models import PR_STATUSES, PullRequest, utcnow
from taskflow.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

MIN_EXPORT_ROWS = 10
CSV_HEADER = ("Title", "Frontend PR", "Backend PR")

_STATUS_FIELDS = ("frontend_status", "backend_status")


def _check_statuses(data: dict[str, Any]) -> None:
    for name in _STATUS_FIELDS:
        value = data.get(name)
        if value is not None and value not in PR_STATUSES:
            msg = f"{name} must be one of: {', '.join(PR_STATUSES)}"
            raise ValidationError(msg)


async def list_prs(db: AsyncSession, user_id: int) -> list[PullRequest]:
    result = await db.execute(
        select(PullRequest)
        .where(PullRequest.user_id == user_id)
        .order_by(PullRequest.created_at.desc(), PullRequest.id.desc())
    )
    return list(result.scalars().all())


async def create_pr(db: AsyncSession, user_id: int, data: dict[str, Any]) -> PullRequest:
    if not data.get("title"):
        msg = "Title is required"
        raise ValidationError(msg)
    _check_statuses(data)

    pr = PullRequest(
        user_id=user_id,
        title=data["title"],
        frontend_status=data.get("frontend_status") or "none",
        backend_status=data.get("backend_status") or "none",
        frontend_link=data.get("frontend_link") or None,
        backend_link=data.get("backend_link") or None,
    )
    db.add(pr)
    await db.flush()
    return pr


async def update_pr(db: AsyncSession, user_id: int, pr_id: int, changes: dict[str, Any]) -> PullRequest:
    if "title" in changes and not changes["title"]:
        msg = "Title is required"
        raise ValidationError(msg)
    _check_statuses(changes)

    result = await db.execute(select(PullRequest).where(PullRequest.id == pr_id, PullRequest.user_id == user_id))
    pr = result.scalar_one_or_none()
    if pr is None:
        msg = "PR not found"
        raise NotFoundError(msg)

    for name, value in changes.items():
        if name in _STATUS_FIELDS:
            value = value or "none"
        elif name in ("frontend_link", "backend_link"):
            value = value or None
        setattr(pr, name, value)
    pr.updated_at = utcnow()
    await db.flush()
    return pr


async def delete_pr(db: AsyncSession, user_id: int, pr_id: int) -> None:
    result = await db.execute(delete(PullRequest).where(PullRequest.id == pr_id, PullRequest.user_id == user_id))
    if not result.rowcount:
        msg = "PR not found"
        raise NotFoundError(msg)


def render_csv(prs: Iterable[PullRequest]) -> str:
    """Render PRs as CSV. A ``none`` status becomes an empty cell."""
    buf = io.StringIO()
    csv.writer(buf, lineterminator="\n").writerow(CSV_HEADER)
    rows = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for pr in prs:
        rows.writerow([
            pr.title,
            "" if pr.frontend_status == "none" else pr.frontend_status,
            "" if pr.backend_status == "none" else pr.backend_status,
        ])
    return buf.getvalue()


async def export_csv(db: AsyncSession, user_id: int) -> str:
    """CSV export of all the user's PRs, oldest first."""
    result = await db.execute(
        select(PullRequest).where(PullRequest.user_id == user_id).order_by(PullRequest.id)
    )
    prs = list(result.scalars().all())
    if len(prs) < MIN_EXPORT_ROWS:
        msg = f"Minimum {MIN_EXPORT_ROWS} PRs required for download"
        raise ValidationError(msg)
    logger.info("prs_exported", user_id=user_id, count=len(prs))
    return render_csv(prs)
