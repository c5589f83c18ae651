"""Host snapshot and installed font discovery."""

from __future__ import annotations

import asyncio
import json
import os
import platform
import socket
from pathlib import Path
from typing import Any, Optional

from hostctl.models.system import SystemSnapshot
from hostctl.services.command_table import font_list_command
from hostctl.services.process_runner import ProcessError, ProcessRunner, process_runner
from hostctl.utils.logging import get_logger
from hostctl.utils.platform import Platform, current_platform

log = get_logger(__name__)

_PROC = Path("/proc")


# ── snapshot parts ────────────────────────────────────────────────────────

async def _cpu() -> dict[str, Any]:
    return {
        "model": platform.processor() or platform.machine(),
        "architecture": platform.machine(),
        "logical_cores": os.cpu_count(),
        "system": platform.system(),
        "release": platform.release(),
    }


async def _current_load() -> dict[str, Any]:
    if not hasattr(os, "getloadavg"):
        return {}
    one, five, fifteen = os.getloadavg()
    return {"load_1m": one, "load_5m": five, "load_15m": fifteen}


def parse_meminfo(text: str) -> dict[str, int]:
    """Parse ``/proc/meminfo`` into byte counts."""
    wanted = {"MemTotal": "total", "MemAvailable": "available", "MemFree": "free",
              "SwapTotal": "swap_total", "SwapFree": "swap_free"}
    mem: dict[str, int] = {}
    for line in text.splitlines():
        key, _, rest = line.partition(":")
        if key in wanted:
            parts = rest.split()
            if parts:
                mem[wanted[key]] = int(parts[0]) * 1024
    return mem


async def _memory() -> dict[str, int]:
    meminfo = _PROC / "meminfo"
    if not meminfo.exists():
        return {}
    return parse_meminfo(meminfo.read_text(encoding="utf-8"))


async def _network_interfaces() -> list[str]:
    if not hasattr(socket, "if_nameindex"):
        return []
    return [name for _, name in socket.if_nameindex()]


def parse_net_dev(text: str) -> list[dict[str, Any]]:
    """Parse ``/proc/net/dev`` into per-interface counters."""
    stats: list[dict[str, Any]] = []
    for line in text.splitlines()[2:]:
        iface, sep, rest = line.partition(":")
        if not sep:
            continue
        fields = rest.split()
        if len(fields) < 16:
            continue
        stats.append({
            "iface": iface.strip(),
            "rx_bytes": int(fields[0]),
            "rx_errors": int(fields[2]),
            "rx_dropped": int(fields[3]),
            "tx_bytes": int(fields[8]),
            "tx_errors": int(fields[10]),
            "tx_dropped": int(fields[11]),
        })
    return stats


async def _network_stats() -> list[dict[str, Any]]:
    net_dev = _PROC / "net" / "dev"
    if not net_dev.exists():
        return []
    return parse_net_dev(net_dev.read_text(encoding="utf-8"))


async def _gpu(runner: ProcessRunner) -> list[dict[str, str]]:
    try:
        out = await runner.run(
            "nvidia-smi",
            ["--query-gpu=name,memory.total,driver_version", "--format=csv,noheader"],
        )
    except ProcessError as exc:
        log.debug("sysinfo.gpu_unavailable", error=str(exc))
        return []
    gpus: list[dict[str, str]] = []
    for line in out.splitlines():
        parts = [p.strip() for p in line.split(",")]
        if len(parts) == 3:
            gpus.append({"model": parts[0], "memory": parts[1], "driver": parts[2]})
    return gpus


async def collect_system_snapshot(
    *,
    runner: ProcessRunner | None = None,
) -> Optional[SystemSnapshot]:
    """Gather hardware and network facts concurrently; ``None`` on failure."""
    _runner = runner or process_runner
    try:
        cpu, load, memory, interfaces, net_stats, gpu = await asyncio.gather(
            _cpu(),
            _current_load(),
            _memory(),
            _network_interfaces(),
            _network_stats(),
            _gpu(_runner),
        )
    except Exception as exc:
        log.error("sysinfo.snapshot_failed", error=str(exc))
        return None
    return SystemSnapshot(
        cpu=cpu,
        current_load=load,
        memory=memory,
        network_interfaces=interfaces,
        network_stats=net_stats,
        gpu=gpu,
    )


# ── fonts ─────────────────────────────────────────────────────────────────

def _macos_families(output: str) -> list[str]:
    data = json.loads(output)
    names: list[str] = []
    for font in data.get("SPFontsDataType", []):
        for face in font.get("typefaces", []):
            family = face.get("family")
            if family:
                names.append(family)
    return names


def clean_font_names(names: list[str]) -> list[str]:
    """Trim, strip surrounding double quotes, dedupe and sort."""
    cleaned = set()
    for name in names:
        value = name.strip()
        if value.startswith('"'):
            value = value[1:]
        if value.endswith('"'):
            value = value[:-1]
        if value:
            cleaned.add(value)
    return sorted(cleaned)


async def list_font_families(
    *,
    runner: ProcessRunner | None = None,
    platform_: Platform | None = None,
) -> list[str]:
    """Installed font family names; empty list when they cannot be listed."""
    _runner = runner or process_runner
    _platform = platform_ or current_platform()
    spec = font_list_command(platform=_platform)
    try:
        out = await _runner.run(spec.program, list(spec.args))
        if _platform is Platform.macos:
            names = _macos_families(out)
        else:
            names = out.splitlines()
    except (ProcessError, ValueError) as exc:
        log.error("sysinfo.fonts_failed", error=str(exc))
        return []
    return clean_font_names(names)
