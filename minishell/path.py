"""Look up commands in the directories named by PATH."""

from __future__ import annotations

import os
from collections.abc import Iterable


def find_path(directories: Iterable[str] | None, command: str) -> str | None:
    """Return the first ``directory/command`` that exists and is executable."""
    if directories is None:
        return None
    for directory in directories:
        candidate = f"{directory}/{command}"
        if os.access(candidate, os.F_OK | os.X_OK):
            return candidate
    return None


def get_path(environment_strings: Iterable[str] | None, command: str) -> str | None:
    """Find ``command`` using the first ``PATH=`` entry of ``KEY=VALUE`` strings."""
    for entry in environment_strings or ():
        if entry.startswith("PATH="):
            directories = [part for part in entry[5:].split(":") if part]
            return find_path(directories, command)
    return None