"""
HTTP backend base — JSON POST over urllib with a bounded timeout.

Maps every transport problem to BackendError so the variants only have
to describe their envelope and where the text lives.
"""

from __future__ import annotations

import json
import logging
from http.client import HTTPException
from typing import Any
from urllib import request
from urllib.error import HTTPError, URLError

from shellpilot.adapters.base import DEFAULT_REQUEST_TIMEOUT, BackendClient, BackendError

logger = logging.getLogger(__name__)

_ERROR_BODY_LIMIT = 300


def error_detail(body: Any) -> str | None:
    """Pull a provider error message out of a decoded response body."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        error = error.get("message") or json.dumps(error)
    return str(error) if error else None


class HTTPBackend(BackendClient):
    """Shared plumbing for JSON-over-HTTP backends."""

    label = "AI backend"
    default_base_url = ""
    default_model = ""

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        api_key: str | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.base_url = (base_url or self.default_base_url).rstrip("/")
        self.model = model or self.default_model
        self.api_key = api_key
        self.timeout = timeout

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "endpoint": self.base_url,
            "model": self.model,
            "authenticated": bool(self.api_key),
            "timeout": self.timeout,
        }

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _fail(self, message: str) -> BackendError:
        logger.error("[%s] %s", self.name, message)
        return BackendError(self.name, message)

    def _post(self, url: str, payload: dict[str, Any]) -> Any:
        """POST ``payload`` as JSON and return the decoded JSON body."""
        data = json.dumps(payload).encode("utf-8")
        req = request.Request(url, data=data, headers=self._headers(), method="POST")
        logger.debug("[%s] POST %s (timeout=%ss)", self.name, url, self.timeout)

        try:
            with request.urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except HTTPError as exc:
            detail = None
            try:
                detail = error_detail(json.loads(exc.read().decode("utf-8")))
            except Exception:  # body is best-effort detail only
                logger.debug("[%s] Could not decode HTTP %s error body", self.name, exc.code)
            message = f"{self.label} returned HTTP {exc.code}"
            if detail:
                message = f"{message}: {detail[:_ERROR_BODY_LIMIT]}"
            raise self._fail(message) from exc
        except URLError as exc:
            raise self._fail(f"{self.label} API error: cannot reach {self.base_url} ({exc.reason})") from exc
        except TimeoutError as exc:
            raise self._fail(f"{self.label} request to {url} timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise self._fail(f"{self.label} API error: {exc}") from exc
        except HTTPException as exc:
            # connection dropped mid-response (IncompleteRead, BadStatusLine, ...)
            raise self._fail(f"{self.label} API error: {exc!r}") from exc

        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise self._fail(f"{self.label} returned a response that is not valid JSON") from exc

    def _text_field(self, body: Any, field: str = "response") -> str:
        """Return ``body[field]`` or raise if the provider gave no text."""
        if not isinstance(body, dict):
            raise self._fail(f"{self.label} returned an unexpected response shape")
        detail = error_detail(body)
        if detail:
            raise self._fail(f"{self.label} error: {detail}")
        text = body.get(field)
        if not isinstance(text, str):
            raise self._fail(f"{self.label} response has no '{field}' field")
        if not text.strip():
            raise self._fail(f"{self.label} returned an empty response")
        return text
