"""
Shared test fixtures and configuration.
"""

import json

import pytest

from shellpilot.adapters.mock import MockBackend
from shellpilot.adapters.shell.command import CommandExecutor
from shellpilot.core.engine.orchestrator import Orchestrator
from shellpilot.core.security.allowlist import AllowListRegistry
from shellpilot.core.services.system_info import SystemInfoProbe

# Environment variables the config loader reads
CONFIG_ENV_VARS = (
    "FREE_AI_SERVICE",
    "OLLAMA_MODEL",
    "OLLAMA_URL",
    "HUGGINGFACE_API_KEY",
    "HF_MODEL",
    "LOCAL_AI_URL",
    "LOCAL_AI_MODEL",
    "SHELLPILOT_REQUEST_TIMEOUT",
    "SHELLPILOT_LOG_LEVEL",
    "SHELLPILOT_LOG_FILE",
    "SHELLPILOT_LOG_FILE_LEVEL",
)


def _plan_json(*commands, thoughts="test", explanation="test plan", confidence=0.9) -> str:
    return json.dumps(
        {
            "thoughts": thoughts,
            "commands": [{"command": name, "args": list(args)} for name, args in commands],
            "explanation": explanation,
            "confidence": confidence,
        }
    )


@pytest.fixture
def allowlist() -> AllowListRegistry:
    """Small registry with the binaries the tests spawn."""
    return AllowListRegistry(["echo", "sh", "sleep", "true", "false", "pwd", "ls"])


@pytest.fixture
def executor(allowlist: AllowListRegistry) -> CommandExecutor:
    return CommandExecutor(allowlist)


@pytest.fixture
def fixed_probe() -> SystemInfoProbe:
    """Probe with deterministic facts."""
    return SystemInfoProbe(
        probes={
            "os": lambda: "darwin",
            "arch": lambda: "arm64",
            "platform_version": lambda: "14.1",
        }
    )


@pytest.fixture
def mock_backend() -> MockBackend:
    return MockBackend()


@pytest.fixture
def orchestrator(mock_backend, executor, fixed_probe) -> Orchestrator:
    return Orchestrator(backend=mock_backend, executor=executor, probe=fixed_probe)


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """Run in an empty directory with no shellpilot configuration in the environment."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def plan_json():
    """Render a backend response carrying the given (name, args) commands."""
    return _plan_json
