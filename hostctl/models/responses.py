"""Common API response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    version: str


class RunScriptResponse(BaseModel):
    success: bool
    output: str = ""
    error: Optional[str] = None


class ShutdownRequest(BaseModel):
    minutes: int = Field(ge=0)


class ShutdownResponse(BaseModel):
    scheduled: bool
    message: str


class FontsResponse(BaseModel):
    families: list[str]
