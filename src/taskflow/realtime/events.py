"""Domain event fan-out.

Handlers publish after their commit succeeds. Delivery is fire-and-forget:
an event goes only to the acting user's room, at most once, and delivery
problems are logged rather than raised back into the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog
from fastapi import Request
from pydantic import BaseModel

from taskflow.realtime.manager import room_name

if TYPE_CHECKING:
    from taskflow.realtime.manager import ChannelManager

logger = structlog.get_logger()


class EventKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class EntityKind(str, Enum):
    TASK = "task"


@dataclass(frozen=True)
class DomainEvent:
    """Something that happened to one of a user's entities."""

    kind: EventKind
    entity: EntityKind
    payload: Any

    @property
    def name(self) -> str:
        """Wire name, e.g. ``task_created``."""
        return f"{self.entity.value}_{self.kind.value}"


def _to_payload(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    return obj


class EventEmitter:
    """Publishes domain events to per-user realtime rooms."""

    def __init__(self, channels: ChannelManager) -> None:
        self._channels = channels

    async def publish(self, user_id: int, event: DomainEvent) -> int:
        """Send ``event`` to ``user-{user_id}``. Returns the number of recipients."""
        room = room_name(user_id)
        try:
            sent = await self._channels.emit_to_room(room, event.name, _to_payload(event.payload))
        except Exception as e:
            logger.warning("event_publish_failed", event_name=event.name, room=room, error=str(e))
            return 0
        logger.debug("event_published", event_name=event.name, room=room, recipients=sent)
        return sent

    async def task_created(self, user_id: int, task: Any) -> int:
        return await self.publish(user_id, DomainEvent(EventKind.CREATED, EntityKind.TASK, task))

    async def task_updated(self, user_id: int, task: Any) -> int:
        return await self.publish(user_id, DomainEvent(EventKind.UPDATED, EntityKind.TASK, task))

    async def task_deleted(self, user_id: int, task_id: int) -> int:
        return await self.publish(
            user_id, DomainEvent(EventKind.DELETED, EntityKind.TASK, {"id": task_id})
        )


def get_event_emitter(request: Request) -> EventEmitter:
    """FastAPI dependency returning the application's emitter."""
    return request.app.state.events
