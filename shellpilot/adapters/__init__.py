"""Adapters — AI backends and the command executor.

Public re-exports for convenient access.
"""

from shellpilot.adapters.base import BackendClient, BackendError
from shellpilot.adapters.mock import MockBackend
from shellpilot.adapters.registry import BACKENDS, create_backend
from shellpilot.adapters.shell.command import CommandExecutor

__all__ = [
    "BACKENDS",
    "BackendClient",
    "BackendError",
    "CommandExecutor",
    "MockBackend",
    "create_backend",
]
