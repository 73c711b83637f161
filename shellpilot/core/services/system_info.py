"""
System info probe — ambient host facts for the prompt context.

Read-only and best-effort: each fact comes from an independent sub-probe,
and a sub-probe that fails is left out of the result. Uses the
``platform`` module only; it never spawns a process.
"""

from __future__ import annotations

import logging
import platform
from typing import Callable

logger = logging.getLogger(__name__)

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
}

_OS_LABELS = {"darwin": "macOS", "linux": "Linux", "windows": "Windows"}


def _os_name() -> str:
    name = platform.system().lower()
    if not name:
        raise ValueError("platform name unavailable")
    return name


def _arch() -> str:
    machine = platform.machine().lower()
    if not machine:
        raise ValueError("machine type unavailable")
    return _ARCH_ALIASES.get(machine, machine)


def _machine() -> str:
    machine = platform.machine()
    if not machine:
        raise ValueError("machine type unavailable")
    return machine


def _runtime_version() -> str:
    return f"{platform.python_implementation()} {platform.python_version()}"


def _platform_version() -> str:
    system = platform.system()
    if system == "Darwin":
        release = platform.mac_ver()[0]
        if release:
            return release
    elif system == "Linux":
        try:
            pretty = platform.freedesktop_os_release().get("PRETTY_NAME")
        except OSError:
            pretty = None
        if pretty:
            return pretty
    release = platform.release()
    if not release:
        raise ValueError("platform release unavailable")
    return release


class SystemInfoProbe:
    """Collect host facts: os, arch, version, machine, platform_version."""

    def __init__(self, probes: dict[str, Callable[[], str]] | None = None):
        self._probes = probes if probes is not None else {
            "os": _os_name,
            "arch": _arch,
            "version": _runtime_version,
            "machine": _machine,
            "platform_version": _platform_version,
        }

    def probe(self) -> dict[str, str]:
        facts: dict[str, str] = {}
        for key, fn in self._probes.items():
            try:
                facts[key] = fn()
            except Exception as e:  # sub-probes are optional by contract
                logger.debug("System probe %s skipped: %s", key, e)
        return facts


def describe(facts: dict[str, str]) -> str:
    """One-line context string, e.g. ``Current system: darwin arm64, macOS 14.1``."""
    os_name = facts.get("os", "unknown")
    parts = [p for p in (os_name, facts.get("arch")) if p]
    line = "Current system: " + " ".join(parts)
    version = facts.get("platform_version")
    if version:
        label = _OS_LABELS.get(os_name, os_name)
        line += f", {label} {version}"
    return line
