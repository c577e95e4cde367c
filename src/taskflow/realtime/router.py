"""WebSocket endpoint with in-band token authentication."""

from __future__ import annotations

import json
import uuid

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from taskflow.auth.dependencies import resolve_identity
from taskflow.auth.jwt import TokenError

logger = structlog.get_logger()

router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Single WebSocket endpoint for live task updates.

    The connection is accepted without credentials and receives nothing
    until it authenticates.

    Protocol:
        Client -> Server:
            {"action": "authenticate", "token": "<jwt>"}
            {"action": "ping"}

        Server -> Client:
            {"event": "authenticated", "data": {"ok": true}}
            {"event": "auth_error", "data": {"error": "Invalid token"}}
            {"event": "pong"}
            {"event": "error", "data": {"message": "..."}}
            {"event": "task_created" | "task_updated" | "task_deleted", "data": {...}}
    """
    channels = websocket.app.state.channels
    conn_id = str(uuid.uuid4())
    await channels.connect(websocket, conn_id)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                await channels.send(conn_id, "error", {"message": "Invalid JSON"})
                continue
            if not isinstance(msg, dict):
                await channels.send(conn_id, "error", {"message": "Expected a JSON object"})
                continue

            action = msg.get("action")

            if action == "authenticate":
                token = msg.get("token")
                try:
                    if not isinstance(token, str) or not token:
                        reason = "No token provided"
                        raise TokenError(reason)
                    identity = resolve_identity(token)
                except TokenError as e:
                    logger.info("ws_auth_failed", conn_id=conn_id, error=str(e))
                    await channels.send(conn_id, "auth_error", {"error": "Invalid token"})
                    continue
                channels.join(conn_id, identity)
                await channels.send(conn_id, "authenticated", {"ok": True})

            elif action == "ping":
                await channels.send(conn_id, "pong")

            else:
                await channels.send(conn_id, "error", {"message": f"Unknown action: {action}"})

    except WebSocketDisconnect:
        await channels.disconnect(conn_id)
    except Exception:
        logger.exception("ws_error", conn_id=conn_id)
        await channels.disconnect(conn_id)
