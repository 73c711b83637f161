"""
Health checker — is this installation ready to take requests?

Three components are checked: configuration, the AI backend (one
connection test, nothing executed) and the allowed commands (which of
them resolve on PATH). Used by the CLI ``doctor`` command.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from shellpilot.core.config.loader import Settings
from shellpilot.core.engine.orchestrator import Orchestrator
from shellpilot.core.security.allowlist import AllowListRegistry

logger = logging.getLogger(__name__)


@dataclass
class ComponentHealth:
    """Health of a single component."""

    name: str
    status: str = "unknown"  # healthy, degraded, unhealthy, unknown
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "message": self.message,
            "details": self.details,
        }


@dataclass
class SystemHealth:
    """Aggregate health of all checked components."""

    status: str = "healthy"
    timestamp: str = ""
    components: list[ComponentHealth] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.timestamp:
            self.timestamp = datetime.now(UTC).isoformat()

    @property
    def ok(self) -> bool:
        return self.status in ("healthy", "degraded")

    def add(self, component: ComponentHealth) -> None:
        self.components.append(component)
        self._recalculate()

    def _recalculate(self) -> None:
        statuses = [c.status for c in self.components]
        if any(s == "unhealthy" for s in statuses):
            self.status = "unhealthy"
        elif any(s == "degraded" for s in statuses):
            self.status = "degraded"
        elif all(s == "healthy" for s in statuses):
            self.status = "healthy"
        else:
            self.status = "unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "timestamp": self.timestamp,
            "components": [c.to_dict() for c in self.components],
        }


def check_configuration(
    settings: Settings | None,
    error: str | None = None,
) -> ComponentHealth:
    """Report whether settings loaded, and what they resolved to."""
    if settings is None:
        return ComponentHealth(
            name="configuration",
            status="unhealthy",
            message=error or "Configuration not loaded",
        )

    details: dict[str, Any] = {
        "backend": settings.backend,
        "model": settings.model,
        "base_url": settings.base_url,
        "request_timeout": settings.request_timeout,
        "api_key": "set" if settings.api_key else "not set",
    }
    return ComponentHealth(
        name="configuration",
        status="healthy",
        message=f"Backend '{settings.backend}' configured",
        details=details,
    )


def check_backend(orchestrator: Orchestrator) -> ComponentHealth:
    """Send the connection test prompt through the configured backend."""
    ok, message = orchestrator.check_backend()
    if not ok:
        logger.warning("Backend check failed: %s", message)
    return ComponentHealth(
        name="backend",
        status="healthy" if ok else "unhealthy",
        message=message,
        details={"backend": orchestrator.backend.describe()},
    )


def check_allowed_commands(allowlist: AllowListRegistry) -> ComponentHealth:
    """Check which allowed commands resolve to an executable on PATH.

    Missing commands are common (platform-specific tools); only an
    allow-list with nothing runnable is reported as degraded.
    """
    found = [name for name in allowlist if shutil.which(name)]
    missing = [name for name in allowlist if name not in found]
    total = len(allowlist)

    if not found:
        status = "degraded"
        message = f"None of the {total} allowed commands were found on PATH"
    else:
        status = "healthy"
        message = f"{len(found)}/{total} allowed commands found on PATH"

    return ComponentHealth(
        name="allowed_commands",
        status=status,
        message=message,
        details={"found": len(found), "total": total, "missing": missing},
    )


def check_system_health(
    settings: Settings | None = None,
    config_error: str | None = None,
    orchestrator: Orchestrator | None = None,
) -> SystemHealth:
    """Run all health checks and return aggregate status."""
    health = SystemHealth()
    health.add(check_configuration(settings, config_error))

    if orchestrator is not None:
        health.add(check_backend(orchestrator))
        health.add(check_allowed_commands(orchestrator.executor.allowlist))

    return health
