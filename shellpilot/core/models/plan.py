"""
Plan and report models — what the AI suggested and what happened.

CommandPlan is the normalized output of one backend call. ExecutionReport
is the terminal artifact of one request: the plan, one result per planned
command (index-aligned), and the backend error if the request never got
that far.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shellpilot.core.models.command import CommandRequest, CommandResult

DEGRADED_REASONING = "Failed to parse AI response as structured output"


class RequestPhase(StrEnum):
    """Per-request state machine.

    PROMPTING → AWAITING_BACKEND → BACKEND_FAILED (terminal)
                                 → PARSING → EXECUTING → DONE (terminal)
    """

    PROMPTING = "prompting"
    AWAITING_BACKEND = "awaiting_backend"
    BACKEND_FAILED = "backend_failed"
    PARSING = "parsing"
    EXECUTING = "executing"
    DONE = "done"


class CommandPlan(BaseModel):
    """Normalized command plan.

    ``confidence`` and ``reasoning`` are advisory only; nothing gates
    execution on them.
    """

    model_config = ConfigDict(frozen=True)

    reasoning: str = ""
    commands: tuple[CommandRequest, ...] = ()
    explanation: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    degradation: str | None = None  # set only when the backend text was unusable

    @property
    def degraded(self) -> bool:
        return self.degradation is not None

    @classmethod
    def empty(cls) -> CommandPlan:
        """Plan attached to a report whose backend call failed."""
        return cls()

    @classmethod
    def degraded_from(cls, raw: str, reason: str) -> CommandPlan:
        """Zero-command plan that preserves the model's text verbatim."""
        return cls(
            reasoning=DEGRADED_REASONING,
            commands=(),
            explanation=raw,
            confidence=0.0,
            degradation=reason,
        )


class ExecutionReport(BaseModel):
    """Result of handling one user request."""

    plan: CommandPlan = Field(default_factory=CommandPlan.empty)
    results: list[CommandResult] = Field(default_factory=list)
    backend_error: str | None = None
    phase: RequestPhase = RequestPhase.DONE

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.succeeded)

    @property
    def ok(self) -> bool:
        return self.backend_error is None and self.failed == 0

    @property
    def status(self) -> str:
        if self.backend_error is not None:
            return "backend_failed"
        if not self.results:
            return "no_commands"
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        data["status"] = self.status
        data["total"] = self.total
        data["succeeded"] = self.succeeded
        data["failed"] = self.failed
        return data
