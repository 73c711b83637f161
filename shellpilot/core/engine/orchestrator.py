"""
Orchestrator — one user request from text to execution report.

Flow:
    system facts → prompt → backend → raw text → plan → execute each command → report

Only a BackendError stops a request early; it is reported, and nothing is
executed. Everything after the backend call degrades to data: parse
problems become a degraded plan, command problems become failed results.
Commands run strictly in plan order, one at a time, each under its own
deadline; a failing command never prevents the next one from running.

The orchestrator holds no per-request state, so independent ``handle``
calls may run concurrently.
"""

from __future__ import annotations

import logging

from shellpilot.adapters.base import BackendClient, BackendError
from shellpilot.adapters.shell.command import CommandExecutor
from shellpilot.core.models.command import CommandResult
from shellpilot.core.models.plan import CommandPlan, ExecutionReport, RequestPhase
from shellpilot.core.services.plan_parser import ResponsePlanParser
from shellpilot.core.services.prompt import build_prompt
from shellpilot.core.services.system_info import SystemInfoProbe, describe

logger = logging.getLogger(__name__)

CONNECTION_TEST_PROMPT = "Connection test. Reply with the single word: ok"


def _enter(phase: RequestPhase) -> RequestPhase:
    logger.debug("Request phase → %s", phase.value)
    return phase


class Orchestrator:
    """Compose probe, prompt, backend, parser and executor.

    Args:
        backend: The configured AI backend.
        executor: Executor that enforces the allow-list.
        parser: Plan parser (default: ResponsePlanParser()).
        probe: Host facts probe (default: SystemInfoProbe()).
    """

    def __init__(
        self,
        backend: BackendClient,
        executor: CommandExecutor,
        parser: ResponsePlanParser | None = None,
        probe: SystemInfoProbe | None = None,
    ):
        self.backend = backend
        self.executor = executor
        self.parser = parser or ResponsePlanParser()
        self.probe = probe or SystemInfoProbe()

    def build_prompt(self, user_text: str) -> str:
        facts = self.probe.probe()
        return build_prompt(user_text, describe(facts), self.executor.allowlist.names)

    def handle(self, user_text: str) -> ExecutionReport:
        """Handle one request and return its report. Never raises BackendError."""
        _enter(RequestPhase.PROMPTING)
        prompt = self.build_prompt(user_text)

        _enter(RequestPhase.AWAITING_BACKEND)
        try:
            raw = self.backend.send(prompt)
        except BackendError as e:
            phase = _enter(RequestPhase.BACKEND_FAILED)
            logger.error("Backend %s failed: %s", e.backend, e.message)
            return ExecutionReport(
                plan=CommandPlan.empty(),
                results=[],
                backend_error=str(e),
                phase=phase,
            )

        _enter(RequestPhase.PARSING)
        plan = self.parser.parse(raw)

        _enter(RequestPhase.EXECUTING)
        results: list[CommandResult] = []
        for index, request in enumerate(plan.commands, start=1):
            logger.info("Command %d/%d: %s", index, len(plan.commands), request.display)
            results.append(self.executor.execute(request))

        phase = _enter(RequestPhase.DONE)
        return ExecutionReport(plan=plan, results=results, phase=phase)

    def check_backend(self) -> tuple[bool, str]:
        """Send a minimal prompt; report whether any text came back.

        Nothing is parsed or executed.
        """
        try:
            raw = self.backend.send(CONNECTION_TEST_PROMPT)
        except BackendError as e:
            return False, e.message
        return True, f"{self.backend.name} responded ({len(raw)} chars)"
