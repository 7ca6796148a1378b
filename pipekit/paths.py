"""Locating executables the way a shell does: split ``PATH`` and probe each entry."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from typing import Union

Environment = Union[Mapping[str, str], Iterable[str]]


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on the single character ``sep``, dropping empty words."""
    if len(sep) != 1:
        raise ValueError("separator must be a single character")
    return [word for word in text.split(sep) if word]


def find_env_path(env: Environment) -> str | None:
    """Return the value of ``PATH`` from ``env``, or None when it is absent.

    ``env`` is either a mapping of names to values or a sequence of
    ``NAME=value`` strings; in the latter case the first entry starting with
    ``PATH=`` wins.
    """
    if isinstance(env, Mapping):
        return env.get("PATH")
    for entry in env:
        if entry.startswith("PATH="):
            return entry[len("PATH="):]
    return None


def command_exists(path: str) -> bool:
    """Tell whether ``path`` exists and may be executed."""
    return os.access(path, os.F_OK | os.X_OK)


def find_command(directories: Iterable[str], name: str) -> str | None:
    """Return the first ``directory/name`` that is executable, or None."""
    for directory in directories:
        candidate = f"{directory}/{name}"
        if command_exists(candidate):
            return candidate
    return None


def resolve_command(name: str, env: Environment) -> str | None:
    """Resolve a command name to the path of an executable, or None.

    A name holding a slash is taken as a path and only checked; any other
    name is searched for in the directories listed by ``PATH``.
    """
    if "/" in name:
        return name if command_exists(name) else None
    env_path = find_env_path(env)
    if env_path is None:
        return None
    return find_command(split_words(env_path, ":"), name)