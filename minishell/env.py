"""The shell's environment: an ordered set of variables."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]*)")


def _atoi(text: str) -> int:
    """Read a leading integer the way the C library does; 0 if there is none."""
    match = _ATOI.match(text)
    sign, digits = match.groups() if match else ("", "")
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


class Environment:
    """Environment variables kept in insertion order."""

    def __init__(
        self, entries: Mapping[str, str] | Iterable[tuple[str, str]] = ()
    ) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        self._vars: dict[str, str] = {}
        for key, value in pairs:
            self._vars[key] = value

    @classmethod
    def from_strings(cls, strings: Iterable[str]) -> Environment:
        """Build from ``KEY=VALUE`` strings, splitting at the first ``=``.

        Strings without an ``=`` are skipped.
        """
        pairs = []
        for entry in strings:
            key, sep, value = entry.partition("=")
            if sep:
                pairs.append((key, value))
        return cls(pairs)

    def get(self, key: str) -> str | None:
        """The value of ``key``, or None if it is not set."""
        return self._vars.get(key)

    def set(self, key: str, value: str) -> None:
        """Set ``key``, replacing its value or adding it at the end."""
        self._vars[key] = value

    def unset(self, key: str) -> None:
        """Remove ``key``; nothing happens if it is not set."""
        self._vars.pop(key, None)

    def to_strings(self) -> list[str]:
        """The variables as ``KEY=VALUE`` strings, in order."""
        return [f"{key}={value}" for key, value in self._vars.items()]

    def increment_shlvl(self) -> int:
        """Raise SHLVL by one (treating a missing value as 0) and return it."""
        current = self._vars.get("SHLVL")
        level = (_atoi(current) if current is not None else 0) + 1
        self.set("SHLVL", str(level))
        return level

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        """Yield ``(key, value)`` pairs in order."""
        return iter(list(self._vars.items()))

    def __contains__(self, key: object) -> bool:
        return key in self._vars