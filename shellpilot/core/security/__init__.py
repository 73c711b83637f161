"""Security boundary — the command allow-list."""

from shellpilot.core.security.allowlist import DEFAULT_ALLOWED_COMMANDS, AllowListRegistry

__all__ = ["AllowListRegistry", "DEFAULT_ALLOWED_COMMANDS"]
