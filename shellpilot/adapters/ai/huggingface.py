"""
Hugging Face backend — hosted inference API.

The response is an array of candidates; the first candidate's
``generated_text`` is the raw text. An empty array, or an error object
in place of the array, is a BackendError.
"""

from __future__ import annotations

from shellpilot.adapters.ai.http import HTTPBackend, error_detail

MAX_NEW_TOKENS = 1000
TEMPERATURE = 0.1


class HuggingFaceBackend(HTTPBackend):
    """Hugging Face Inference API with bearer-token auth."""

    label = "Hugging Face"
    default_base_url = "https://api-inference.huggingface.co"
    default_model = "microsoft/DialoGPT-medium"

    @property
    def name(self) -> str:
        return "huggingface"

    def send(self, prompt: str) -> str:
        body = self._post(
            f"{self.base_url}/models/{self.model}",
            {
                "inputs": prompt,
                "parameters": {
                    "max_new_tokens": MAX_NEW_TOKENS,
                    "temperature": TEMPERATURE,
                },
            },
        )

        if isinstance(body, dict):
            detail = error_detail(body)
            raise self._fail(
                f"{self.label} error: {detail}" if detail
                else f"{self.label} returned an unexpected response shape"
            )
        if not isinstance(body, list):
            raise self._fail(f"{self.label} returned an unexpected response shape")
        if not body:
            raise self._fail(f"no response from {self.label}")

        return self._text_field(body[0], "generated_text")
