"""
Response plan parser — raw backend text → typed CommandPlan.

Never fails. Text that is not JSON, or JSON that does not match the
expected plan shape, becomes a degraded plan: no commands, zero
confidence, and the original text preserved verbatim as the explanation.
A degraded plan is a normal outcome ("the model said something, but not a
plan"), distinct from a backend failure.

Expected payload:

    {
      "thoughts": "...",
      "commands": [{"command": "ls", "args": ["-la"], "timeout": 30}],
      "explanation": "...",
      "confidence": 0.95
    }
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterator

from pydantic import BaseModel, Field, ValidationError

from shellpilot.core.models.command import CommandRequest
from shellpilot.core.models.plan import CommandPlan

logger = logging.getLogger(__name__)

INVALID_JSON_REASON = "Invalid JSON response from AI"
SCHEMA_REASON = "AI response did not match the command plan schema"

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n?(.*?)```", re.DOTALL | re.IGNORECASE)


class PlanPayload(BaseModel):
    """Wire shape of a plan as the model is asked to produce it."""

    thoughts: str = ""
    commands: list[CommandRequest]
    explanation: str = ""
    # strict: booleans and numeric strings are not confidences
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, strict=True)


def _candidates(raw: str) -> Iterator[str]:
    """Yield JSON candidates: whole text, fenced blocks, outermost braces."""
    seen: set[str] = set()

    def fresh(text: str) -> bool:
        text = text.strip()
        if not text or text in seen:
            return False
        seen.add(text)
        return True

    whole = raw.strip()
    if fresh(whole):
        yield whole

    for match in _FENCE_RE.finditer(raw):
        block = match.group(1).strip()
        if fresh(block):
            yield block

    start, end = raw.find("{"), raw.rfind("}")
    if 0 <= start < end:
        span = raw[start : end + 1].strip()
        if fresh(span):
            yield span


def _first_object(raw: str) -> dict[str, Any] | None:
    for candidate in _candidates(raw):
        try:
            data = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        if isinstance(data, dict):
            return data
    return None


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors()[:3]:
        loc = ".".join(str(p) for p in err["loc"]) or "(root)"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class ResponsePlanParser:
    """Normalize backend text into a CommandPlan."""

    def parse(self, raw: str) -> CommandPlan:
        data = _first_object(raw)
        if data is None:
            return self._degrade(raw, INVALID_JSON_REASON)

        try:
            payload = PlanPayload.model_validate(data)
        except ValidationError as e:
            return self._degrade(raw, f"{SCHEMA_REASON}: {_summarize(e)}")

        plan = CommandPlan(
            reasoning=payload.thoughts,
            commands=tuple(payload.commands),
            explanation=payload.explanation,
            confidence=payload.confidence,
        )
        logger.debug(
            "Parsed plan: %d command(s), confidence=%.2f",
            len(plan.commands),
            plan.confidence,
        )
        return plan

    @staticmethod
    def _degrade(raw: str, reason: str) -> CommandPlan:
        logger.warning("Degrading AI response to an empty plan: %s", reason)
        return CommandPlan.degraded_from(raw, reason)
