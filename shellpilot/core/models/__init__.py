"""
Domain models — Pydantic types for requests, results, plans and reports.

All models are re-exported here for convenient access:

    from shellpilot.core.models import CommandRequest, CommandResult, CommandPlan
"""

from shellpilot.core.models.command import (
    DEFAULT_TIMEOUT_SECONDS,
    MAX_TIMEOUT_SECONDS,
    CommandRequest,
    CommandResult,
)
from shellpilot.core.models.plan import (
    DEGRADED_REASONING,
    CommandPlan,
    ExecutionReport,
    RequestPhase,
)

__all__ = [
    # command.py
    "CommandRequest",
    "CommandResult",
    "DEFAULT_TIMEOUT_SECONDS",
    "MAX_TIMEOUT_SECONDS",
    # plan.py
    "CommandPlan",
    "DEGRADED_REASONING",
    "ExecutionReport",
    "RequestPhase",
]
