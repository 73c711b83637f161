"""
Command models — the execution contract.

A CommandRequest names one executable and its arguments. A CommandResult
captures everything that happened when the executor handled it. The
executor NEVER raises: rejections, spawn errors, non-zero exits and
timeouts all come back as a failed CommandResult.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

DEFAULT_TIMEOUT_SECONDS = 30
MAX_TIMEOUT_SECONDS = 24 * 60 * 60


def now_timestamp() -> str:
    """Current UTC time as a fixed-width ISO string (millisecond precision)."""
    return datetime.now(UTC).isoformat(timespec="milliseconds")


class CommandRequest(BaseModel):
    """A single command the executor is asked to run.

    Accepts both the Python field names and the wire names used by the
    AI payload (``command``, ``args``, ``timeout``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1, validation_alias=AliasChoices("name", "command"))
    arguments: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("arguments", "args")
    )
    timeout_seconds: int | None = Field(
        default=None,
        le=MAX_TIMEOUT_SECONDS,
        validation_alias=AliasChoices("timeout_seconds", "timeout"),
    )

    @field_validator("arguments", mode="before")
    @classmethod
    def _null_arguments(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def effective_timeout(self) -> int:
        """Deadline in seconds, at most MAX_TIMEOUT_SECONDS.

        Non-positive or missing values fall back to the default.
        """
        if self.timeout_seconds is not None and self.timeout_seconds > 0:
            return min(self.timeout_seconds, MAX_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS

    @property
    def display(self) -> str:
        return " ".join((self.name, *self.arguments))


class CommandResult(BaseModel):
    """Outcome of one CommandRequest."""

    model_config = ConfigDict(frozen=True)

    succeeded: bool
    output: str = ""
    error_message: str | None = None
    exit_code: int
    elapsed: timedelta = timedelta(0)
    completed_at: str = Field(default_factory=now_timestamp)

    @property
    def duration_ms(self) -> float:
        return self.elapsed.total_seconds() * 1000

    @classmethod
    def rejected(cls, name: str, elapsed: timedelta, **kwargs: Any) -> CommandResult:
        """Result for a command refused by the allow-list (nothing was spawned)."""
        return cls(
            succeeded=False,
            output="",
            error_message=f"Command '{name}' is not allowed for security reasons",
            exit_code=-1,
            elapsed=elapsed,
            **kwargs,
        )

    @classmethod
    def from_run(
        cls,
        exit_code: int,
        output: str,
        elapsed: timedelta,
        error_message: str | None = None,
    ) -> CommandResult:
        """Result for a command that was spawned (or attempted)."""
        return cls(
            succeeded=exit_code == 0 and error_message is None,
            output=output,
            error_message=error_message,
            exit_code=exit_code,
            elapsed=elapsed,
        )
