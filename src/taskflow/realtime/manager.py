"""Realtime channel manager.

Tracks active WebSocket connections and the per-user room each one has
joined. A connection joins at most one room, ``user-{id}``, after it
authenticates; rooms exist only while they have members.

All state changes happen between awaits on the single event loop, so no
locking is needed.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from fastapi import WebSocket

    from taskflow.auth.dependencies import SessionIdentity

logger = structlog.get_logger()


def room_name(user_id: int) -> str:
    """Room every connection of ``user_id`` joins."""
    return f"user-{user_id}"


@dataclass
class ClientConnection:
    """A single WebSocket client."""

    websocket: WebSocket
    identity: SessionIdentity | None = None
    room: str | None = None
    connected_at: float = field(default_factory=time.time)
    messages_sent: int = 0


class ChannelManager:
    """Manages WebSocket connections and per-user rooms."""

    def __init__(self) -> None:
        self._connections: dict[str, ClientConnection] = {}  # conn_id -> client
        self._rooms: dict[str, set[str]] = {}  # room -> {conn_ids}

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket, conn_id: str) -> None:
        """Accept a new, unauthenticated WebSocket connection."""
        await websocket.accept()
        self._connections[conn_id] = ClientConnection(websocket=websocket)
        logger.info("ws_connected", conn_id=conn_id)

    async def disconnect(self, conn_id: str) -> None:
        """Remove a connection and release its room membership."""
        client = self._connections.pop(conn_id, None)
        if client is None:
            return
        self._leave(conn_id, client)
        logger.info(
            "ws_disconnected",
            conn_id=conn_id,
            user_id=client.identity.id if client.identity else None,
        )

    def join(self, conn_id: str, identity: SessionIdentity) -> str:
        """Bind ``identity`` to the connection and move it into that user's room."""
        client = self._connections.get(conn_id)
        if client is None:
            msg = f"Unknown connection: {conn_id}"
            raise KeyError(msg)

        self._leave(conn_id, client)
        room = room_name(identity.id)
        client.identity = identity
        client.room = room
        self._rooms.setdefault(room, set()).add(conn_id)
        logger.info("ws_joined", conn_id=conn_id, user_id=identity.id, room=room)
        return room

    def _leave(self, conn_id: str, client: ClientConnection) -> None:
        if client.room is None:
            return
        members = self._rooms.get(client.room)
        if members is not None:
            members.discard(conn_id)
            if not members:
                del self._rooms[client.room]
        client.room = None

    def members(self, room: str) -> set[str]:
        """Connection ids currently in ``room`` (a copy)."""
        return set(self._rooms.get(room, ()))

    def room_of(self, conn_id: str) -> str | None:
        client = self._connections.get(conn_id)
        return client.room if client else None

    async def send(self, conn_id: str, event: str, data: Any = None) -> bool:
        """Send one event to one connection. A failed send drops the connection."""
        client = self._connections.get(conn_id)
        if client is None:
            return False
        try:
            await client.websocket.send_text(_envelope(event, data))
        except Exception:
            logger.warning("ws_send_failed", conn_id=conn_id, event_name=event)
            await self.disconnect(conn_id)
            return False
        client.messages_sent += 1
        return True

    async def emit_to_room(self, room: str, event: str, data: Any = None) -> int:
        """Send an event to every member of ``room``.

        Returns the number of connections that received it.
        """
        conn_ids = list(self._rooms.get(room, ()))
        if not conn_ids:
            return 0

        payload = _envelope(event, data)
        sent = 0
        failed: list[str] = []

        for conn_id in conn_ids:
            client = self._connections.get(conn_id)
            if client is None:
                failed.append(conn_id)
                continue
            try:
                await client.websocket.send_text(payload)
                client.messages_sent += 1
                sent += 1
            except Exception:
                failed.append(conn_id)

        for conn_id in failed:
            logger.warning("ws_send_failed", conn_id=conn_id, event_name=event, room=room)
            await self.disconnect(conn_id)

        return sent

    def get_stats(self) -> dict[str, Any]:
        """Aggregate connection counts. Never names rooms, so online user ids stay private."""
        return {
            "total_connections": len(self._connections),
            "authenticated_connections": sum(1 for c in self._connections.values() if c.room),
            "rooms": len(self._rooms),
        }


def _envelope(event: str, data: Any) -> str:
    message: dict[str, Any] = {"event": event}
    if data is not None:
        message["data"] = data
    return json.dumps(message, default=str)
