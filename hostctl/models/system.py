"""Host snapshot model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class SystemSnapshot(BaseModel):
    cpu: dict[str, Any] = Field(default_factory=dict)
    current_load: dict[str, float] = Field(default_factory=dict)
    memory: dict[str, int] = Field(default_factory=dict)
    network_interfaces: list[str] = Field(default_factory=list)
    network_stats: list[dict[str, Any]] = Field(default_factory=list)
    gpu: list[dict[str, str]] = Field(default_factory=list)
