"""Coarse host platform classification."""

from __future__ import annotations

import sys
from enum import Enum
from functools import lru_cache


class Platform(str, Enum):
    windows = "windows"
    macos = "macos"
    unix = "unix"


def classify(platform_id: str) -> Platform:
    """Map a ``sys.platform`` value onto a platform family."""
    if platform_id.startswith(("win32", "cygwin")):
        return Platform.windows
    if platform_id == "darwin":
        return Platform.macos
    return Platform.unix


@lru_cache(maxsize=1)
def current_platform() -> Platform:
    # sys.platform cannot change at runtime
    return classify(sys.platform)
