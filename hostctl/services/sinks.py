"""Observers that receive command outcomes."""

from __future__ import annotations

from typing import Any, Protocol

from fastapi import WebSocket

from hostctl.models.commands import CommandOutcome

COMMAND_RESULT = "command_result"


class NotificationSink(Protocol):
    """Anything that accepts a terminal ``CommandOutcome``."""

    async def deliver(self, outcome: CommandOutcome) -> None:
        ...


class WebSocketSink:
    """Pushes outcomes to a connected UI client as ``command_result`` events."""

    def __init__(self, websocket: WebSocket) -> None:
        self._ws = websocket

    async def deliver(self, outcome: CommandOutcome) -> None:
        payload: dict[str, Any] = {"type": COMMAND_RESULT, **outcome.model_dump()}
        await self._ws.send_json(payload)
