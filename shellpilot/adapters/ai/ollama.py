"""Ollama backend — local daemon, ``POST /api/generate`` with streaming off."""

from __future__ import annotations

from shellpilot.adapters.ai.http import HTTPBackend


class OllamaBackend(HTTPBackend):
    """Local Ollama daemon. No authentication."""

    label = "Ollama"
    default_base_url = "http://localhost:11434"
    default_model = "llama3.2"

    @property
    def name(self) -> str:
        return "ollama"

    def send(self, prompt: str) -> str:
        body = self._post(
            f"{self.base_url}/api/generate",
            {"model": self.model, "prompt": prompt, "stream": False},
        )
        return self._text_field(body, "response")
