"""
Backend base — the contract between the orchestrator and AI services.

Every AI provider is a BackendClient variant. The orchestrator only talks
to backends through this protocol: send a prompt, get raw text back, or
get a BackendError. Variants differ only in request envelope,
authentication and where the generated text sits in the response.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

DEFAULT_REQUEST_TIMEOUT = 30.0


class BackendError(Exception):
    """The backend produced no usable text (transport, auth or provider failure)."""

    def __init__(self, backend: str, message: str):
        super().__init__(message)
        self.backend = backend
        self.message = message


class BackendClient(ABC):
    """Abstract base class for all AI backends.

    To add a provider:
        1. Subclass BackendClient (or HTTPBackend)
        2. Implement name and send
        3. Add it to BACKENDS in the backend registry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The backend identifier (e.g., 'ollama', 'huggingface', 'local')."""

    @abstractmethod
    def send(self, prompt: str) -> str:
        """Send one prompt and return the raw generated text.

        Raises:
            BackendError: when no text could be obtained. Network failures
                and empty or absent responses MUST surface here, never as
                an empty string.
        """

    def describe(self) -> dict[str, Any]:
        """Connection details for diagnostics (never includes secrets)."""
        return {"name": self.name}

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
