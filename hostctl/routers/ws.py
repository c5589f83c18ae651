"""Live UI channel: commands in, outcomes out."""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from hostctl.auth import websocket_authorized
from hostctl.models.commands import InvocationRequest
from hostctl.models.responses import ShutdownRequest
from hostctl.routers.scripts import run_invocation
from hostctl.services.shutdown import shutdown_orchestrator
from hostctl.services.sinks import WebSocketSink
from hostctl.utils.logging import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["ws"])

SCRIPT_RESULT = "script_result"


async def _send_error(websocket: WebSocket, detail: str) -> None:
    await websocket.send_json({"type": "error", "detail": detail})


@router.websocket("/ws")
async def ui_channel(websocket: WebSocket) -> None:
    if not websocket_authorized(websocket):
        await websocket.close(code=1008)
        return
    await websocket.accept()
    sink = WebSocketSink(websocket)
    log.info("ws.connected")
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                inbound: Any = json.loads(raw)
            except ValueError:
                await _send_error(websocket, "Invalid payload.")
                continue
            if not isinstance(inbound, dict):
                await _send_error(websocket, "Invalid payload.")
                continue
            msg_type = str(inbound.get("type") or "").strip().lower()

            if msg_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if msg_type == "shutdown":
                try:
                    req = ShutdownRequest(minutes=inbound.get("minutes"))
                except ValidationError:
                    await _send_error(websocket, "minutes must be a non-negative integer.")
                    continue
                shutdown_orchestrator.schedule_shutdown(req.minutes, sink)
                continue

            if msg_type == "run_script":
                try:
                    req = InvocationRequest(
                        executable=inbound.get("executable") or "",
                        arguments=inbound.get("arguments") or [],
                        stdin=inbound.get("stdin"),
                        timeout=inbound.get("timeout"),
                    )
                except ValidationError:
                    await _send_error(websocket, "Invalid run_script payload.")
                    continue
                result = await run_invocation(req)
                await websocket.send_json({"type": SCRIPT_RESULT, **result.model_dump()})
                continue

            await _send_error(websocket, f"Unknown message type: {msg_type or '<empty>'}")
    except WebSocketDisconnect:
        log.info("ws.disconnected")
