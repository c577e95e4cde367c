"""Task router: /tasks endpoints. Mutations are pushed to the owner's realtime room."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity, get_optional_identity
from taskflow.database import get_session
from taskflow.realtime.events import EventEmitter, get_event_emitter
from taskflow.schemas import SuccessResponse
from taskflow.tasks.schemas import TaskCreate, TaskFilters, TaskResponse, TaskUpdate
from taskflow.tasks.service import (
    clear_completed,
    create_task,
    delete_task,
    list_tasks,
    mark_all_done,
    update_task,
)

logger = structlog.get_logger()

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=list[TaskResponse])
async def get_tasks(
    filters: TaskFilters = Depends(),
    identity: SessionIdentity | None = Depends(get_optional_identity),
    db: AsyncSession = Depends(get_session),
) -> list[TaskResponse]:
    """List tasks with optional filters and sorting.

    Works without a token; anonymous callers only see unowned tasks.
    """
    tasks = await list_tasks(db, identity.id if identity else None, filters)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post("", response_model=TaskResponse)
async def post_task(
    body: TaskCreate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
    events: EventEmitter = Depends(get_event_emitter),
) -> TaskResponse:
    task = await create_task(db, identity.id, body.model_dump(exclude_unset=True))
    await db.commit()
    response = TaskResponse.model_validate(task)
    await events.task_created(identity.id, response)
    return response


@router.post("/clear-completed", response_model=SuccessResponse)
async def clear_completed_tasks(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    removed = await clear_completed(db, identity.id)
    await db.commit()
    logger.info("tasks_cleared", user_id=identity.id, count=removed)
    return SuccessResponse()


@router.post("/mark-all-done", response_model=SuccessResponse)
async def mark_all_tasks_done(
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    changed = await mark_all_done(db, identity.id)
    await db.commit()
    logger.info("tasks_marked_done", user_id=identity.id, count=changed)
    return SuccessResponse()


@router.put("/{task_id}", response_model=TaskResponse)
async def put_task(
    task_id: int,
    body: TaskUpdate,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
    events: EventEmitter = Depends(get_event_emitter),
) -> TaskResponse:
    task = await update_task(db, identity.id, task_id, body.model_dump(exclude_unset=True))
    await db.commit()
    response = TaskResponse.model_validate(task)
    await events.task_updated(identity.id, response)
    return response


@router.delete("/{task_id}", response_model=SuccessResponse)
async def remove_task(
    task_id: int,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
    events: EventEmitter = Depends(get_event_emitter),
) -> SuccessResponse:
    await delete_task(db, identity.id, task_id)
    await db.commit()
    await events.task_deleted(identity.id, task_id)
    return SuccessResponse()
