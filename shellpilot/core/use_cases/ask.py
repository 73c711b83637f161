"""
Ask use case — load configuration, build the pipeline, handle one request.

This is the top-level entry the CLI calls: config → backend + allow-list
→ orchestrator → report. Configuration problems come back as
``AskResult.error``; backend problems are inside the report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from shellpilot.adapters.base import BackendClient
from shellpilot.adapters.mock import MockBackend
from shellpilot.adapters.registry import create_backend
from shellpilot.adapters.shell.command import CommandExecutor
from shellpilot.core.config.loader import ConfigError, Settings, load_settings
from shellpilot.core.engine.orchestrator import Orchestrator
from shellpilot.core.models.plan import ExecutionReport

logger = logging.getLogger(__name__)


@dataclass
class AskResult:
    """Result of asking for one request."""

    report: ExecutionReport | None = None
    backend: str = ""
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.error:
            return {"error": self.error}
        result: dict[str, Any] = {"backend": self.backend}
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def build_orchestrator(settings: Settings, mock: bool = False) -> Orchestrator:
    """Wire the pipeline for ``settings``. The allow-list is built once here."""
    allowlist = settings.build_allowlist()
    backend: BackendClient = MockBackend() if mock else create_backend(settings)
    executor = CommandExecutor(allowlist, working_dir=settings.working_dir)
    return Orchestrator(backend=backend, executor=executor)


def load_orchestrator(
    config_path: Path | None = None,
    env_file: Path | None = None,
    mock: bool = False,
) -> Orchestrator:
    """Load settings and build the pipeline.

    Raises:
        ConfigError: If configuration is missing or invalid.
    """
    settings = load_settings(config_path=config_path, env_file=env_file)
    return build_orchestrator(settings, mock=mock)


def ask(
    text: str,
    config_path: Path | None = None,
    env_file: Path | None = None,
    mock: bool = False,
    orchestrator: Orchestrator | None = None,
) -> AskResult:
    """Handle one natural-language request.

    Args:
        text: The user's request.
        config_path: Optional explicit shellpilot.yml.
        env_file: Optional explicit .env file.
        mock: If True, use the mock backend (no AI service is contacted).
        orchestrator: Optional pre-built pipeline (skips config loading).

    Returns:
        AskResult with the execution report.
    """
    result = AskResult()

    if orchestrator is None:
        try:
            orchestrator = load_orchestrator(config_path, env_file, mock=mock)
        except ConfigError as e:
            result.error = str(e)
            return result

    result.backend = orchestrator.backend.name
    logger.info("Processing request with %s: %s", result.backend, text)
    result.report = orchestrator.handle(text)
    return result
