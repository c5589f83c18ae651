"""Fire-and-forget command dispatch with an optional outcome sink."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence, Union

from hostctl.config import Settings, settings
from hostctl.models.commands import CommandOutcome, CommandSpec
from hostctl.services.process_runner import kill_quietly
from hostctl.services.sinks import NotificationSink
from hostctl.utils.logging import get_logger

log = get_logger(__name__)

COMMAND_FAILED = "Error executing command."


class CommandDispatcher:
    """Spawns fully resolved command vectors in the background.

    Only the exit status matters; stdout and stderr are discarded.  The
    outcome goes to the sink when one is given and is dropped otherwise.
    """

    def __init__(self, cfg: Settings | None = None) -> None:
        self._cfg = cfg or settings
        self._tasks: set[asyncio.Task] = set()

    def dispatch(
        self,
        command: Union[CommandSpec, Sequence[str]],
        success_message: str,
        sink: Optional[NotificationSink] = None,
        *,
        timeout: float | None = None,
    ) -> asyncio.Task:
        """Start *command* and return immediately.

        The returned task resolves to the ``CommandOutcome``; callers may
        ignore it.  Must be called from a running event loop.
        """
        spec = command if isinstance(command, CommandSpec) else CommandSpec.from_argv(list(command))
        limit = self._cfg.hostctl_dispatch_timeout_seconds if timeout is None else timeout
        task = asyncio.get_running_loop().create_task(
            self._execute(spec, success_message, sink, limit or None),
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def _execute(
        self,
        spec: CommandSpec,
        success_message: str,
        sink: Optional[NotificationSink],
        timeout: float | None,
    ) -> CommandOutcome:
        outcome = await self._spawn(spec, success_message, timeout)
        await self._report(outcome, sink)
        return outcome

    async def _spawn(
        self,
        spec: CommandSpec,
        success_message: str,
        timeout: float | None,
    ) -> CommandOutcome:
        log.info("dispatch.start", argv=spec.argv)
        try:
            proc = await asyncio.create_subprocess_exec(
                *spec.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except (OSError, ValueError) as exc:
            log.warning("dispatch.spawn_failed", argv=spec.argv, error=str(exc))
            return CommandOutcome(succeeded=False, message=f"Error during execution: {exc}")

        try:
            rc = await asyncio.wait_for(proc.wait(), timeout)
        except asyncio.TimeoutError:
            await kill_quietly(proc)
            log.warning("dispatch.timeout", argv=spec.argv, timeout=timeout)
            return CommandOutcome(
                succeeded=False,
                message=f"Error during execution: timed out after {timeout:g} seconds",
            )
        except asyncio.CancelledError:
            await kill_quietly(proc)
            raise

        log.info("dispatch.exit", argv=spec.argv, rc=rc)
        if rc == 0:
            return CommandOutcome(succeeded=True, message=success_message)
        return CommandOutcome(succeeded=False, message=COMMAND_FAILED)

    async def _report(
        self,
        outcome: CommandOutcome,
        sink: Optional[NotificationSink],
    ) -> None:
        if sink is None:
            log.debug("dispatch.outcome_dropped", **outcome.model_dump())
            return
        try:
            await sink.deliver(outcome)
        except Exception as exc:
            # A vanished client must not turn into an unhandled task error
            log.warning("dispatch.sink_failed", error=str(exc))


# Singleton
command_dispatcher = CommandDispatcher()
