"""Delayed system shutdown with a best-effort desktop warning."""

from __future__ import annotations

import asyncio
from typing import Optional

from hostctl.services.command_table import (
    notify_command,
    shutdown_command,
    shutdown_message,
)
from hostctl.services.dispatcher import CommandDispatcher, command_dispatcher
from hostctl.services.sinks import NotificationSink
from hostctl.utils.logging import get_logger
from hostctl.utils.platform import Platform

log = get_logger(__name__)


class ShutdownOrchestrator:
    def __init__(
        self,
        dispatcher: CommandDispatcher | None = None,
        *,
        platform: Platform | None = None,
    ) -> None:
        self._dispatcher = dispatcher or command_dispatcher
        self._platform = platform

    def schedule_shutdown(
        self,
        minutes: int,
        sink: Optional[NotificationSink] = None,
    ) -> list[asyncio.Task]:
        """Warn the local user (where supported) and schedule the shutdown.

        Both commands are dispatched independently; a failed warning does
        not hold back the shutdown.  Returns the dispatch tasks.
        """
        if minutes < 0:
            raise ValueError("minutes must be >= 0")

        msg = shutdown_message(minutes)
        tasks: list[asyncio.Task] = []

        notify = notify_command(msg, platform=self._platform)
        if notify is not None:
            tasks.append(self._dispatcher.dispatch(notify, msg, sink))

        tasks.append(
            self._dispatcher.dispatch(
                shutdown_command(minutes, platform=self._platform), msg, sink,
            ),
        )
        log.info("shutdown.scheduled", minutes=minutes, dispatches=len(tasks))
        return tasks


# Singleton
shutdown_orchestrator = ShutdownOrchestrator()
