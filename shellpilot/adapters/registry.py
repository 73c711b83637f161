"""
Backend registry — the closed set of AI backend variants.

The orchestrator never branches on provider names. Adding a provider
means adding a class here, not a case anywhere else.
"""

from __future__ import annotations

import logging

from shellpilot.adapters.ai.http import HTTPBackend
from shellpilot.adapters.ai.huggingface import HuggingFaceBackend
from shellpilot.adapters.ai.local import LocalBackend
from shellpilot.adapters.ai.ollama import OllamaBackend
from shellpilot.core.config.loader import ConfigError, Settings

logger = logging.getLogger(__name__)

BACKENDS: dict[str, type[HTTPBackend]] = {
    "ollama": OllamaBackend,
    "huggingface": HuggingFaceBackend,
    "local": LocalBackend,
}


def create_backend(settings: Settings) -> HTTPBackend:
    """Build the configured backend variant.

    Raises:
        ConfigError: If the backend name is unknown.
    """
    backend_cls = BACKENDS.get(settings.backend)
    if backend_cls is None:
        raise ConfigError(
            f"Unsupported AI backend: {settings.backend}. "
            f"Supported: {', '.join(BACKENDS)}"
        )

    backend = backend_cls(
        base_url=settings.base_url,
        model=settings.model,
        api_key=settings.api_key,
        timeout=settings.request_timeout,
    )
    logger.debug("Created backend %r (%s)", backend, backend.describe())
    return backend
