"""
Doctor use case — load configuration and run every health check.
"""

from __future__ import annotations

from pathlib import Path

from shellpilot.core.config.loader import ConfigError, load_settings
from shellpilot.core.observability.health import SystemHealth, check_system_health
from shellpilot.core.use_cases.ask import build_orchestrator


def run_doctor(
    config_path: Path | None = None,
    env_file: Path | None = None,
    mock: bool = False,
) -> SystemHealth:
    """Check configuration, backend connectivity and allowed commands."""
    try:
        settings = load_settings(config_path=config_path, env_file=env_file)
        orchestrator = build_orchestrator(settings, mock=mock)
    except ConfigError as e:
        return check_system_health(config_error=str(e))

    return check_system_health(settings=settings, orchestrator=orchestrator)
