"""Run an executable or script to completion and capture its output.

Script files get an explicit interpreter on Windows (PowerShell for ``.ps1``,
a configured bash for ``.sh``); everywhere else the file is launched directly
and the OS honours its shebang line.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from hostctl.config import Settings, settings
from hostctl.models.commands import CommandSpec
from hostctl.services.command_table import resolve_launch
from hostctl.utils.logging import get_logger
from hostctl.utils.platform import Platform

log = get_logger(__name__)


class ProcessError(RuntimeError):
    """Base for every way an invocation can fail; ``str()`` is the failure text."""


class SpawnFailure(ProcessError):
    """The OS could not create the child process."""


class NonZeroExit(ProcessError):
    """The process ran but exited with a nonzero status."""

    def __init__(self, message: str, returncode: int, stderr: str) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class ProcessTimeout(ProcessError):
    """The process outlived its timeout and was killed."""


def _effective_timeout(timeout: Optional[float], default: Optional[float]) -> Optional[float]:
    value = default if timeout is None else timeout
    return value if value else None


async def kill_quietly(proc: asyncio.subprocess.Process) -> None:
    """Kill *proc* if still running and reap it."""
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


class ProcessRunner:
    """Spawns one child process per ``run`` call; holds no shared state."""

    def __init__(
        self,
        cfg: Settings | None = None,
        *,
        platform: Platform | None = None,
    ) -> None:
        self._cfg = cfg or settings
        self._platform = platform

    def resolve(self, executable: str, arguments: list[str] | None = None) -> CommandSpec:
        return resolve_launch(
            executable, arguments, platform=self._platform, cfg=self._cfg,
        )

    async def run(
        self,
        executable: str,
        arguments: list[str] | None = None,
        stdin: str | None = None,
        *,
        timeout: float | None = None,
    ) -> str:
        """Run *executable* and return everything it wrote to stdout.

        Raises ``SpawnFailure`` if it could not be started, ``NonZeroExit``
        with the captured stderr if it failed, and ``ProcessTimeout`` if it
        ran longer than *timeout* seconds.
        """
        spec = self.resolve(executable, arguments)
        limit = _effective_timeout(timeout, self._cfg.hostctl_script_timeout_seconds)
        log.info("process.start", argv=spec.argv, timeout=limit)

        try:
            proc = await asyncio.create_subprocess_exec(
                *spec.argv,
                stdin=asyncio.subprocess.PIPE if stdin else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as exc:
            log.warning("process.spawn_failed", argv=spec.argv, error=str(exc))
            raise SpawnFailure(f"Failed to start process: {exc}") from exc

        # communicate() writes stdin then closes it, so readers see EOF
        payload = stdin.encode() if stdin else None
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(payload), limit)
        except asyncio.TimeoutError:
            await kill_quietly(proc)
            log.warning("process.timeout", argv=spec.argv, timeout=limit)
            raise ProcessTimeout(f"Process timed out after {limit:g} seconds") from None
        except asyncio.CancelledError:
            await kill_quietly(proc)
            raise

        out = stdout.decode(errors="replace")
        err = stderr.decode(errors="replace")
        log.info("process.exit", argv=spec.argv, rc=proc.returncode)
        log.debug("process.output", argv=spec.argv, out=out[:200])
        if proc.returncode != 0:
            raise NonZeroExit(
                f"Error executing script: {err}",
                returncode=proc.returncode,
                stderr=err,
            )
        return out


# Singleton
process_runner = ProcessRunner()
