"""
Mock backend — universal test double for the backend contract.

Used by the CLI ``--mock`` flag and by tests to simulate an AI service
without network access. Returns queued responses in order, then the
default response; can be told to fail with a BackendError.
"""

from __future__ import annotations

import json
from collections import deque
from typing import Any

from shellpilot.adapters.base import BackendClient, BackendError

DEFAULT_MOCK_RESPONSE = json.dumps(
    {
        "thoughts": "Mock backend: no model was consulted.",
        "commands": [{"command": "echo", "args": ["[mock] shellpilot"], "timeout": 5}],
        "explanation": "Echo a marker so the execution path can be exercised.",
        "confidence": 1.0,
    }
)


class MockBackend(BackendClient):
    """Scriptable backend for testing.

    By default, returns a small valid plan for every prompt.
    """

    def __init__(
        self,
        backend_name: str = "mock",
        default_response: str = DEFAULT_MOCK_RESPONSE,
    ):
        self._name = backend_name
        self._default_response = default_response
        self._queued: deque[str] = deque()
        self._failure: str | None = None
        self._prompts: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def prompts(self) -> list[str]:
        """Every prompt this mock has received."""
        return self._prompts

    @property
    def call_count(self) -> int:
        return len(self._prompts)

    def queue_response(self, text: str) -> None:
        """Return ``text`` for the next unanswered prompt."""
        self._queued.append(text)

    def set_failure(self, error: str = "Mock backend failure") -> None:
        """Make every subsequent send raise BackendError."""
        self._failure = error

    def send(self, prompt: str) -> str:
        self._prompts.append(prompt)
        if self._failure is not None:
            raise BackendError(self._name, self._failure)
        if self._queued:
            return self._queued.popleft()
        return self._default_response

    def describe(self) -> dict[str, Any]:
        return {"name": self._name, "endpoint": "(in-process)", "model": "mock"}

    def reset(self) -> None:
        """Clear recorded prompts, queued responses and failure mode."""
        self._prompts.clear()
        self._queued.clear()
        self._failure = None
