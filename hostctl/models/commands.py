"""Command-related data structures."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class CommandSpec(BaseModel):
    """Immutable program + argument vector, ready to spawn."""

    model_config = {"frozen": True}

    program: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    @classmethod
    def from_argv(cls, argv: list[str] | tuple[str, ...]) -> "CommandSpec":
        if not argv:
            raise ValueError("command vector must not be empty")
        return cls(program=argv[0], args=tuple(argv[1:]))


class CommandOutcome(BaseModel):
    """Terminal result of a dispatched command, delivered to a sink."""

    succeeded: bool
    message: str


class InvocationRequest(BaseModel):
    """One request to run an executable or script to completion."""

    executable: str
    arguments: list[str] = Field(default_factory=list)
    stdin: Optional[str] = None
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds before the process is killed; omit to use the server default",
    )

    @field_validator("executable")
    @classmethod
    def _executable_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("executable must not be empty")
        return value
