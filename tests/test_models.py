"""
Tests for command, plan and report models.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from shellpilot.core.models import (
    DEFAULT_TIMEOUT_SECONDS,
    MAX_TIMEOUT_SECONDS,
    CommandPlan,
    CommandRequest,
    CommandResult,
    ExecutionReport,
    RequestPhase,
)

# ── CommandRequest ──────────────────────────────────────────────────


class TestCommandRequest:
    def test_python_field_names(self):
        req = CommandRequest(name="ls", arguments=("-la",), timeout_seconds=5)
        assert req.name == "ls"
        assert req.arguments == ("-la",)
        assert req.timeout_seconds == 5

    def test_wire_aliases(self):
        req = CommandRequest.model_validate({"command": "df", "args": ["-h"], "timeout": 10})
        assert req.name == "df"
        assert req.arguments == ("-h",)
        assert req.timeout_seconds == 10

    def test_null_args_means_no_arguments(self):
        req = CommandRequest.model_validate({"command": "pwd", "args": None})
        assert req.arguments == ()

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            CommandRequest(name="")

    def test_non_string_args_rejected(self):
        with pytest.raises(ValidationError):
            CommandRequest.model_validate({"command": "ls", "args": [{"x": 1}]})

    def test_effective_timeout_default(self):
        assert CommandRequest(name="ls").effective_timeout == DEFAULT_TIMEOUT_SECONDS

    @pytest.mark.parametrize("value", [0, -5])
    def test_effective_timeout_non_positive(self, value):
        assert CommandRequest(name="ls", timeout_seconds=value).effective_timeout == 30

    def test_effective_timeout_explicit(self):
        assert CommandRequest(name="ls", timeout_seconds=3).effective_timeout == 3

    def test_timeout_above_maximum_rejected(self):
        with pytest.raises(ValidationError):
            CommandRequest.model_validate({"command": "echo", "timeout": 99999999999})

    def test_effective_timeout_capped(self):
        req = CommandRequest.model_construct(name="echo", arguments=(), timeout_seconds=3_000_000)
        assert req.effective_timeout == MAX_TIMEOUT_SECONDS

    def test_display(self):
        assert CommandRequest(name="ls", arguments=("-l", "/tmp")).display == "ls -l /tmp"

    def test_frozen(self):
        req = CommandRequest(name="ls")
        with pytest.raises(ValidationError):
            req.name = "rm"


# ── CommandResult ───────────────────────────────────────────────────


class TestCommandResult:
    def test_rejected(self):
        result = CommandResult.rejected("sudo", elapsed=timedelta(0))
        assert not result.succeeded
        assert result.exit_code == -1
        assert result.output == ""
        assert result.error_message == "Command 'sudo' is not allowed for security reasons"

    def test_from_run_success(self):
        result = CommandResult.from_run(0, "hello\n", timedelta(milliseconds=12))
        assert result.succeeded
        assert result.error_message is None
        assert result.duration_ms == pytest.approx(12)

    def test_from_run_nonzero(self):
        result = CommandResult.from_run(2, "", timedelta(0), error_message="exit status 2")
        assert not result.succeeded
        assert result.exit_code == 2

    def test_zero_exit_with_error_is_failure(self):
        result = CommandResult.from_run(0, "", timedelta(0), error_message="boom")
        assert not result.succeeded

    def test_completed_at_is_utc_iso(self):
        result = CommandResult.from_run(0, "", timedelta(0))
        assert result.completed_at.endswith("+00:00")
        # YYYY-MM-DDTHH:MM:SS.mmm+00:00
        assert len(result.completed_at) == 29


# ── CommandPlan ─────────────────────────────────────────────────────


class TestCommandPlan:
    def test_empty(self):
        plan = CommandPlan.empty()
        assert plan.commands == ()
        assert plan.confidence == 0.0
        assert not plan.degraded

    def test_degraded_from(self):
        plan = CommandPlan.degraded_from("raw text", "Invalid JSON response from AI")
        assert plan.degraded
        assert plan.commands == ()
        assert plan.confidence == 0.0
        assert plan.explanation == "raw text"
        assert plan.degradation == "Invalid JSON response from AI"

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            CommandPlan(confidence=1.5)


# ── ExecutionReport ─────────────────────────────────────────────────


def _ok():
    return CommandResult.from_run(0, "", timedelta(0))


def _fail():
    return CommandResult.from_run(1, "", timedelta(0), error_message="exit status 1")


class TestExecutionReport:
    def test_status_ok(self):
        report = ExecutionReport(results=[_ok(), _ok()])
        assert report.status == "ok"
        assert report.ok
        assert report.total == 2

    def test_status_partial(self):
        report = ExecutionReport(results=[_fail(), _ok()])
        assert report.status == "partial"
        assert report.succeeded == 1
        assert report.failed == 1
        assert not report.ok

    def test_status_failed(self):
        assert ExecutionReport(results=[_fail()]).status == "failed"

    def test_status_no_commands(self):
        report = ExecutionReport()
        assert report.status == "no_commands"
        assert report.ok

    def test_status_backend_failed(self):
        report = ExecutionReport(backend_error="down", phase=RequestPhase.BACKEND_FAILED)
        assert report.status == "backend_failed"
        assert not report.ok

    def test_to_dict(self):
        report = ExecutionReport(results=[_ok()])
        data = report.to_dict()
        assert data["status"] == "ok"
        assert data["total"] == 1
        assert data["phase"] == "done"
        assert data["results"][0]["exit_code"] == 0
