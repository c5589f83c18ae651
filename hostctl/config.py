"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All configuration is driven by environment variables."""

    # API key
    hostctl_api_key: str = ""

    # Script interpreters (Windows only)
    hostctl_bash_path: str = r"C:\Program Files\Git\bin\bash.exe"
    hostctl_powershell_exe: str = "powershell.exe"

    # Timeouts (None or 0 waits forever)
    hostctl_script_timeout_seconds: Optional[float] = None
    hostctl_dispatch_timeout_seconds: Optional[float] = None

    # Shutdown
    hostctl_shutdown_use_sudo: bool = True
    hostctl_notify_title: str = "Shutdown Alert"

    # Logging
    hostctl_log_level: str = "INFO"
    hostctl_log_json: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton – import this from anywhere
settings = Settings()
