"""
Tests for CLI commands — ask, interactive, exec, allowed, doctor and global options.
"""

import json
from unittest.mock import patch
from urllib.error import URLError

from click.testing import CliRunner

from shellpilot.adapters.mock import MockBackend
from shellpilot.main import cli

MOCK_BACKEND = "shellpilot.core.use_cases.ask.MockBackend"


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "shellpilot" in result.output
        for command in ("ask", "interactive", "exec", "allowed", "doctor"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


# ── ask ─────────────────────────────────────────────────────────────


class TestAskCommand:
    def test_mock_backend(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["ask", "--mock", "say", "hello"])
        assert result.exit_code == 0, result.output
        assert "Thoughts" in result.output
        assert "echo [mock] shellpilot" in result.output
        assert "Success" in result.output

    def test_json(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["ask", "--mock", "--json", "say", "hello"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["backend"] == "mock"
        assert data["report"]["status"] == "ok"
        assert data["report"]["results"][0]["output"] == "[mock] shellpilot\n"

    def test_backend_unreachable(self, clean_env):
        runner = CliRunner()
        with patch(
            "shellpilot.adapters.ai.http.request.urlopen",
            side_effect=URLError("Connection refused"),
        ):
            result = runner.invoke(cli, ["ask", "list", "files"])
        assert result.exit_code == 1
        assert "AI backend error" in result.output

    def test_config_error(self, clean_env, monkeypatch):
        monkeypatch.setenv("FREE_AI_SERVICE", "huggingface")
        runner = CliRunner()
        result = runner.invoke(cli, ["ask", "--mock", "hello"])
        assert result.exit_code == 1
        assert "HUGGINGFACE_API_KEY" in result.output

    def test_requires_text(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["ask"])
        assert result.exit_code == 2

    def test_rejected_command_exits_nonzero(self, clean_env):
        plan = json.dumps({"commands": [{"command": "sudo", "args": ["whoami"]}]})
        runner = CliRunner()
        with patch(MOCK_BACKEND, return_value=MockBackend(default_response=plan)):
            result = runner.invoke(cli, ["ask", "--mock", "become root"])
        assert result.exit_code == 1
        assert "not allowed for security reasons" in result.output

    def test_degraded_plan(self, clean_env):
        runner = CliRunner()
        backend = MockBackend(default_response="I cannot help with that")
        with patch(MOCK_BACKEND, return_value=backend):
            result = runner.invoke(cli, ["ask", "--mock", "x"])
        assert result.exit_code == 0
        assert "Invalid JSON response from AI" in result.output
        assert "I cannot help with that" in result.output


def _write_config(directory) -> str:
    config = directory / "shellpilot.yml"
    config.write_text("allowed_commands: [echo, pwd]\n")
    return str(config)


# ── interactive ─────────────────────────────────────────────────────


class TestInteractiveCommand:
    def test_quit(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["interactive", "--mock"], input="quit\n")
        assert result.exit_code == 0
        assert "Goodbye!" in result.output

    def test_request_then_exit(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["interactive", "--mock"], input="say hi\n\nexit\n")
        assert result.exit_code == 0
        assert "[mock] shellpilot" in result.output
        assert "Goodbye!" in result.output

    def test_backend_error_keeps_session(self, clean_env):
        runner = CliRunner()
        with patch(
            "shellpilot.adapters.ai.http.request.urlopen",
            side_effect=URLError("Connection refused"),
        ):
            result = runner.invoke(cli, ["interactive"], input="one\ntwo\nquit\n")
        assert result.exit_code == 0
        assert result.output.count("AI backend error") == 2


# ── exec ────────────────────────────────────────────────────────────


class TestExecCommand:
    def test_allowed(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["exec", "echo", "hello"])
        assert result.exit_code == 0
        assert "hello" in result.output

    def test_dash_arguments_passed_through(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["exec", "ls", "-a"])
        assert result.exit_code == 0
        assert "." in result.output

    def test_rejected(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["exec", "sudo", "whoami"])
        assert result.exit_code == 1
        assert "not allowed for security reasons" in result.output

    def test_json(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["exec", "--json", "echo", "hi"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["request"]["name"] == "echo"
        assert data["result"]["succeeded"] is True
        assert data["result"]["output"] == "hi\n"

    def test_backend_config_not_needed(self, clean_env, monkeypatch):
        monkeypatch.setenv("FREE_AI_SERVICE", "huggingface")
        runner = CliRunner()
        result = runner.invoke(cli, ["exec", "echo", "hello"])
        assert result.exit_code == 0
        assert "hello" in result.output

    def test_configured_allowlist(self, clean_env):
        runner = CliRunner()
        config = _write_config(clean_env)
        result = runner.invoke(cli, ["--config", config, "exec", "ls"])
        assert result.exit_code == 1
        assert "not allowed" in result.output


# ── allowed ─────────────────────────────────────────────────────────


class TestAllowedCommand:
    def test_default_list(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["allowed"])
        assert result.exit_code == 0
        assert "41, default" in result.output
        assert "system_profiler" in result.output

    def test_backend_config_not_needed(self, clean_env, monkeypatch):
        monkeypatch.setenv("FREE_AI_SERVICE", "local")
        runner = CliRunner()
        result = runner.invoke(cli, ["allowed"])
        assert result.exit_code == 0
        assert "41, default" in result.output

    def test_json(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", _write_config(clean_env), "allowed", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"commands": ["echo", "pwd"], "total": 2}


# ── doctor ──────────────────────────────────────────────────────────


class TestDoctorCommand:
    def test_mock_healthy(self, clean_env):
        runner = CliRunner()
        result = runner.invoke(cli, ["doctor", "--mock", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "healthy"
        assert [c["name"] for c in data["components"]] == [
            "configuration",
            "backend",
            "allowed_commands",
        ]

    def test_config_error(self, clean_env, monkeypatch):
        monkeypatch.setenv("FREE_AI_SERVICE", "local")
        runner = CliRunner()
        result = runner.invoke(cli, ["doctor"])
        assert result.exit_code == 1
        assert "UNHEALTHY" in result.output
        assert "LOCAL_AI_URL" in result.output

    def test_backend_down(self, clean_env):
        runner = CliRunner()
        with patch(
            "shellpilot.adapters.ai.http.request.urlopen",
            side_effect=URLError("Connection refused"),
        ):
            result = runner.invoke(cli, ["doctor"])
        assert result.exit_code == 1
        assert "Connection refused" in result.output
