"""
Configuration loader — settings from shellpilot.yml, .env and the environment.

Sources, lowest to highest precedence:
    defaults  <  shellpilot.yml  <  .env file  <  process environment

The YAML file is optional and searched upward from the working directory
unless given explicitly. The result is validated into a typed Settings
model; anything invalid raises ConfigError.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, ValidationError

from shellpilot.core.security.allowlist import AllowListRegistry

logger = logging.getLogger(__name__)

# Default config filenames
CONFIG_FILE = "shellpilot.yml"
ENV_FILE = ".env"

SUPPORTED_BACKENDS = ("ollama", "huggingface", "local")
DEFAULT_REQUEST_TIMEOUT = 30.0

# Per-backend environment variables: env name → settings field
_BACKEND_ENV: dict[str, dict[str, str]] = {
    "ollama": {"OLLAMA_MODEL": "model", "OLLAMA_URL": "base_url"},
    "huggingface": {"HUGGINGFACE_API_KEY": "api_key", "HF_MODEL": "model"},
    "local": {"LOCAL_AI_URL": "base_url", "LOCAL_AI_MODEL": "model"},
}


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


class Settings(BaseModel):
    """Validated runtime configuration."""

    backend: str = "ollama"
    base_url: str | None = None
    api_key: str | None = None
    model: str | None = None
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    allowed_commands: list[str] | None = None
    working_dir: str | None = None

    def build_allowlist(self) -> AllowListRegistry:
        """Allow-list for this process: configured names, or the defaults."""
        if self.allowed_commands is None:
            return AllowListRegistry.default()
        try:
            return AllowListRegistry(self.allowed_commands)
        except ValueError as e:
            raise ConfigError(str(e)) from e


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse a .env file into a key/value dict.

    Handles:
    - KEY=value
    - KEY="value"
    - KEY='value'
    - export KEY=value
    - Comments (#)
    - Empty lines

    Lines without ``=`` are skipped with a warning.
    """
    result: dict[str, str] = {}
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        # Strip optional 'export'
        if line.startswith("export "):
            line = line[7:].strip()

        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            logger.warning("Skipping invalid line in %s: %s", path.name, line)
            continue

        value = value.strip()
        # Remove surrounding quotes
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]

        result[key] = value

    return result


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for shellpilot.yml starting from the given directory, walking up."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _load_yaml(path: Path) -> dict[str, Any]:
    logger.debug("Loading config from %s", path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def _apply_env(data: dict[str, Any], env: Mapping[str, str]) -> None:
    """Overlay environment variables onto the file-derived settings."""
    service = env.get("FREE_AI_SERVICE", "").strip()
    if service:
        if service != data.get("backend"):
            # Switching backend: file values for the old backend do not apply
            for key in ("base_url", "api_key", "model"):
                data.pop(key, None)
        data["backend"] = service

    backend = data.get("backend", "ollama")
    for env_name, field_name in _BACKEND_ENV.get(backend, {}).items():
        value = env.get(env_name, "").strip()
        if value:
            data[field_name] = value

    timeout = env.get("SHELLPILOT_REQUEST_TIMEOUT", "").strip()
    if timeout:
        data["request_timeout"] = timeout


def validate_backend(settings: Settings) -> None:
    """Check the selected backend is supported and has what it needs.

    Raises:
        ConfigError: If the backend cannot be built from these settings.
    """
    if settings.backend not in SUPPORTED_BACKENDS:
        raise ConfigError(
            f"Unsupported AI backend: {settings.backend}. "
            f"Supported: {', '.join(SUPPORTED_BACKENDS)}"
        )
    if settings.backend == "huggingface" and not settings.api_key:
        raise ConfigError("HUGGINGFACE_API_KEY environment variable is required for Hugging Face")
    if settings.backend == "local" and not settings.base_url:
        raise ConfigError("LOCAL_AI_URL environment variable is required for local AI")


def load_settings(
    config_path: Path | None = None,
    env_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
    require_backend: bool = True,
) -> Settings:
    """Load and validate settings.

    Args:
        config_path: Explicit shellpilot.yml. If None, searches upward (optional).
        env_file: Explicit .env file. If None, uses ./.env when present.
        environ: Environment mapping (default: os.environ).
        require_backend: Also validate the backend selection. Commands
            that never contact a backend pass False.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If a file is unreadable or the settings are invalid.
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
        data.update(_load_yaml(config_path))
    else:
        found = find_config_file()
        if found is not None:
            data.update(_load_yaml(found))

    env: dict[str, str] = {}
    if env_file is not None:
        if not env_file.is_file():
            raise ConfigError(f"Env file not found: {env_file}")
        env.update(parse_env_file(env_file))
    elif Path(ENV_FILE).is_file():
        env.update(parse_env_file(Path(ENV_FILE)))
    env.update(os.environ if environ is None else environ)

    _apply_env(data, env)

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    settings.build_allowlist()
    if require_backend:
        validate_backend(settings)
        logger.info("Using AI backend '%s'", settings.backend)
    return settings
