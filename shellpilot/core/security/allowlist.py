"""
Allow-list registry — the set of command names that may ever be spawned.

Built once at startup and never mutated afterwards. Lookups are
case-sensitive exact matches: ``/bin/ls`` and ``LS`` are not ``ls``.
Nothing learned from AI output is ever added here.
"""

from __future__ import annotations

from typing import Iterable, Iterator

DEFAULT_ALLOWED_COMMANDS: tuple[str, ...] = (
    "ls", "pwd", "whoami", "date", "uptime",
    "ps", "top", "df", "du", "find",
    "grep", "cat", "head", "tail", "wc",
    "sort", "uniq", "echo", "mkdir", "rmdir",
    "cp", "mv", "rm", "chmod", "chown",
    "file", "stat", "which", "whereis",
    "system_profiler", "sw_vers", "defaults",
    "launchctl", "netstat", "lsof", "ifconfig",
    "ping", "nslookup", "dig", "curl", "wget",
)


class AllowListRegistry:
    """Immutable registry of permitted command names."""

    __slots__ = ("_names", "_lookup")

    def __init__(self, names: Iterable[str]):
        ordered: list[str] = []
        for name in names:
            if not isinstance(name, str) or not name or any(c.isspace() for c in name):
                raise ValueError(f"Invalid command name for allow-list: {name!r}")
            if name not in ordered:
                ordered.append(name)
        self._names: tuple[str, ...] = tuple(ordered)
        self._lookup: frozenset[str] = frozenset(ordered)

    @classmethod
    def default(cls) -> AllowListRegistry:
        return cls(DEFAULT_ALLOWED_COMMANDS)

    @property
    def names(self) -> tuple[str, ...]:
        """Permitted names in declaration order."""
        return self._names

    def is_allowed(self, name: str) -> bool:
        return name in self._lookup

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"<AllowListRegistry size={len(self._names)}>"
