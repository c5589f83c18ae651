"""Platform command table.

Pure mapping from ``(platform, intent)`` to a ``CommandSpec``.  Nothing here
spawns a process, so the whole matrix can be tested on any host.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from hostctl.config import Settings, settings
from hostctl.models.commands import CommandSpec
from hostctl.utils.platform import Platform, current_platform


class Intent(str, Enum):
    notify = "notify"
    shutdown = "shutdown"
    list_fonts = "list_fonts"


# ── script launchers ──────────────────────────────────────────────────────

def _powershell(executable: str, arguments: list[str], cfg: Settings) -> CommandSpec:
    return CommandSpec(
        program=cfg.hostctl_powershell_exe,
        args=("-ExecutionPolicy", "Bypass", "-File", executable, *arguments),
    )


def _bash(executable: str, arguments: list[str], cfg: Settings) -> CommandSpec:
    return CommandSpec(program=cfg.hostctl_bash_path, args=(executable, *arguments))


# Only Windows needs an explicit interpreter; elsewhere the shebang line wins.
SCRIPT_LAUNCHERS: dict[
    tuple[Platform, str], Callable[[str, list[str], Settings], CommandSpec]
] = {
    (Platform.windows, ".ps1"): _powershell,
    (Platform.windows, ".sh"): _bash,
}


def resolve_launch(
    executable: str,
    arguments: list[str] | None = None,
    *,
    platform: Platform | None = None,
    cfg: Settings | None = None,
) -> CommandSpec:
    """Pick the launcher for *executable* based on platform and extension."""
    _platform = platform or current_platform()
    _cfg = cfg or settings
    args = list(arguments or [])
    lowered = executable.lower()

    for (plat, suffix), launcher in SCRIPT_LAUNCHERS.items():
        if plat is _platform and lowered.endswith(suffix):
            return launcher(executable, args, _cfg)
    return CommandSpec(program=executable, args=tuple(args))


# ── system commands ───────────────────────────────────────────────────────

def shutdown_message(minutes: int) -> str:
    return f"The system will shut down in {minutes} minutes."


def _osascript_notify(message: str, title: str) -> CommandSpec:
    return CommandSpec(
        program="osascript",
        args=("-e", f'display notification "{message}" with title "{title}"'),
    )


def _notify_send(message: str, title: str) -> CommandSpec:
    return CommandSpec(program="notify-send", args=(title, message))


def _windows_shutdown(minutes: int, message: str, use_sudo: bool) -> CommandSpec:
    return CommandSpec(program="shutdown", args=("/s", "/f", "/t", str(minutes * 60)))


def _posix_shutdown(minutes: int, message: str, use_sudo: bool) -> CommandSpec:
    argv = ["shutdown", "-h", f"+{minutes}", message]
    if use_sudo:
        argv.insert(0, "sudo")
    return CommandSpec.from_argv(argv)


_WINDOWS_FONTS_SCRIPT = (
    "Add-Type -AssemblyName System.Drawing; "
    "(New-Object System.Drawing.Text.InstalledFontCollection).Families "
    "| ForEach-Object { $_.Name }"
)


def _windows_fonts() -> CommandSpec:
    return CommandSpec(
        program="powershell.exe",
        args=("-NoProfile", "-Command", _WINDOWS_FONTS_SCRIPT),
    )


def _macos_fonts() -> CommandSpec:
    return CommandSpec(program="system_profiler", args=("SPFontsDataType", "-json"))


def _fontconfig_fonts() -> CommandSpec:
    return CommandSpec(program="fc-list", args=("--format", "%{family[0]}\\n"))


# Windows has no notification step before shutdown.
SYSTEM_COMMANDS: dict[tuple[Platform, Intent], Callable[..., CommandSpec]] = {
    (Platform.macos, Intent.notify): _osascript_notify,
    (Platform.unix, Intent.notify): _notify_send,
    (Platform.windows, Intent.shutdown): _windows_shutdown,
    (Platform.macos, Intent.shutdown): _posix_shutdown,
    (Platform.unix, Intent.shutdown): _posix_shutdown,
    (Platform.windows, Intent.list_fonts): _windows_fonts,
    (Platform.macos, Intent.list_fonts): _macos_fonts,
    (Platform.unix, Intent.list_fonts): _fontconfig_fonts,
}


def notify_command(
    message: str,
    *,
    title: str | None = None,
    platform: Platform | None = None,
) -> Optional[CommandSpec]:
    """Desktop notification command, or ``None`` where there is none."""
    builder = SYSTEM_COMMANDS.get((platform or current_platform(), Intent.notify))
    if builder is None:
        return None
    return builder(message, title or settings.hostctl_notify_title)


def shutdown_command(
    minutes: int,
    *,
    platform: Platform | None = None,
    use_sudo: bool | None = None,
) -> CommandSpec:
    builder = SYSTEM_COMMANDS[(platform or current_platform(), Intent.shutdown)]
    sudo = settings.hostctl_shutdown_use_sudo if use_sudo is None else use_sudo
    return builder(minutes, shutdown_message(minutes), sudo)


def font_list_command(*, platform: Platform | None = None) -> CommandSpec:
    return SYSTEM_COMMANDS[(platform or current_platform(), Intent.list_fonts)]()
