"""AI backends — ollama, huggingface, local."""

from shellpilot.adapters.ai.huggingface import HuggingFaceBackend
from shellpilot.adapters.ai.local import LocalBackend
from shellpilot.adapters.ai.ollama import OllamaBackend

__all__ = ["HuggingFaceBackend", "LocalBackend", "OllamaBackend"]
