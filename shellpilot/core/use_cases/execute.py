"""
Execute use case — run one command directly, without an AI backend.

The allow-list from configuration still applies; the request goes through
the same executor the orchestrator uses.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from shellpilot.adapters.shell.command import CommandExecutor
from shellpilot.core.config.loader import ConfigError, load_settings
from shellpilot.core.models.command import CommandRequest, CommandResult


@dataclass
class ExecuteResult:
    """Result of a direct command execution."""

    request: CommandRequest | None = None
    result: CommandResult | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.error:
            return {"error": self.error}
        assert self.request is not None and self.result is not None
        return {
            "request": self.request.model_dump(mode="json"),
            "result": self.result.model_dump(mode="json"),
        }


def run_command(
    name: str,
    arguments: list[str] | tuple[str, ...] = (),
    timeout: int | None = None,
    config_path: Path | None = None,
    env_file: Path | None = None,
) -> ExecuteResult:
    """Run ``name`` with ``arguments`` through the allow-list-enforcing executor."""
    out = ExecuteResult()

    try:
        settings = load_settings(
            config_path=config_path,
            env_file=env_file,
            require_backend=False,
        )
        allowlist = settings.build_allowlist()
    except ConfigError as e:
        out.error = str(e)
        return out

    try:
        out.request = CommandRequest(name=name, arguments=tuple(arguments), timeout_seconds=timeout)
    except ValidationError as e:
        out.error = f"Invalid command request: {e.errors()[0]['msg']}"
        return out

    executor = CommandExecutor(allowlist, working_dir=settings.working_dir)
    out.result = executor.execute(out.request)
    return out
