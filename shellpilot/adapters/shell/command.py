"""
Command executor — the only code path that spawns processes.

Every request is re-validated against the allow-list here, regardless of
what any caller checked upstream. Allowed commands run without a shell,
under their own deadline, with stdout and stderr captured together.
Nothing in this module raises to the caller: every failure becomes a
CommandResult.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import time
from datetime import timedelta
from pathlib import Path

from shellpilot.core.models.command import CommandRequest, CommandResult
from shellpilot.core.security.allowlist import AllowListRegistry

logger = logging.getLogger(__name__)

# How long to drain output after the deadline kill
KILL_GRACE_SECONDS = 1.0


def _since(start: float) -> timedelta:
    return timedelta(seconds=time.monotonic() - start)


def _decode(raw: bytes | None) -> str:
    return raw.decode("utf-8", errors="replace") if raw else ""


def _kill(proc: subprocess.Popen) -> None:
    """Kill the child and anything it started (it leads its own session)."""
    try:
        if hasattr(os, "killpg"):
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        pass


def _drain_after_kill(proc: subprocess.Popen) -> bytes | None:
    """Collect remaining output without waiting on escaped descendants.

    A descendant that started its own session survives the group kill and
    can hold the pipe open; its output is abandoned after the grace period.
    """
    try:
        raw, _ = proc.communicate(timeout=KILL_GRACE_SECONDS)
        return raw
    except subprocess.TimeoutExpired:
        logger.warning("Output pipe still open after kill (pid %d); abandoning output", proc.pid)
        if proc.stdout is not None:
            proc.stdout.close()
        proc.wait()
        return None


class CommandExecutor:
    """Execute allow-listed commands under a per-command deadline.

    Args:
        allowlist: Registry consulted on every call. Held by reference.
        working_dir: Directory commands run in (default: inherit).
    """

    def __init__(
        self,
        allowlist: AllowListRegistry,
        working_dir: str | Path | None = None,
    ):
        self._allowlist = allowlist
        self._working_dir = str(working_dir) if working_dir else None

    @property
    def allowlist(self) -> AllowListRegistry:
        return self._allowlist

    def execute(self, request: CommandRequest) -> CommandResult:
        start = time.monotonic()

        if not self._allowlist.is_allowed(request.name):
            logger.warning("Rejected command not on allow-list: %r", request.name)
            return CommandResult.rejected(request.name, elapsed=_since(start))

        timeout = request.effective_timeout
        argv = [request.name, *request.arguments]
        logger.debug("Executing: %s (timeout=%ss, cwd=%s)", request.display, timeout, self._working_dir)

        timed_out = False
        try:
            with subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                cwd=self._working_dir,
                start_new_session=True,
            ) as proc:
                try:
                    raw, _ = proc.communicate(timeout=timeout)
                except subprocess.TimeoutExpired:
                    timed_out = True
                    _kill(proc)
                    raw = _drain_after_kill(proc)
                returncode = proc.returncode
        except (OSError, ValueError, OverflowError, subprocess.SubprocessError) as e:
            logger.info("Command %r could not be started: %s", request.name, e)
            return CommandResult.from_run(
                exit_code=-1,
                output="",
                elapsed=_since(start),
                error_message=f"Failed to start '{request.name}': {e}",
            )

        output = _decode(raw)
        exit_code = returncode if returncode >= 0 else -1

        if timed_out:
            error: str | None = f"Command timed out after {timeout}s"
        elif returncode < 0:
            error = f"Command terminated by signal {-returncode}"
        elif returncode != 0:
            error = f"exit status {returncode}"
        else:
            error = None

        result = CommandResult.from_run(
            exit_code=exit_code,
            output=output,
            elapsed=_since(start),
            error_message=error,
        )
        logger.info(
            "Command %s finished: exit=%d ok=%s (%.0fms)",
            request.name,
            result.exit_code,
            result.succeeded,
            result.duration_ms,
        )
        return result
