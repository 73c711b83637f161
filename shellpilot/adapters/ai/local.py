"""Generic local HTTP backend — ``POST /generate`` returning ``response``."""

from __future__ import annotations

from shellpilot.adapters.ai.http import HTTPBackend


class LocalBackend(HTTPBackend):
    """Any self-hosted service speaking ``{model, prompt}`` → ``{response | error}``."""

    label = "Local API"
    default_model = "default"

    @property
    def name(self) -> str:
        return "local"

    def send(self, prompt: str) -> str:
        body = self._post(
            f"{self.base_url}/generate",
            {"model": self.model, "prompt": prompt},
        )
        return self._text_field(body, "response")
