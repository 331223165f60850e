"""Locating built application binaries in a cargo target directory."""

from __future__ import annotations

import os
from pathlib import Path


class BinaryNotFoundError(FileNotFoundError):
    """Raised when the application binary cannot be found."""


def find_workspace_binary(
    name: str, target_dir: str | os.PathLike[str], profile: str | None = None
) -> Path:
    """Return the path of binary ``name`` under ``target_dir/<profile>``.

    A ``name`` containing a path separator is taken as a path of its own. The
    profile defaults to ``debug``.
    """
    if "/" in name or "\\" in name:
        path = Path(name)
        if path.exists():
            return path
        raise BinaryNotFoundError(f'App binary not found at specified path: "{path}"')

    if profile is None:
        profile = "debug"

    if "/" in profile or "\\" in profile or "\0" in profile:
        raise ValueError(
            f"Invalid profile name '{profile}': profile names cannot contain path separators"
        )

    target = Path(target_dir)
    binary_path = target / profile / name
    if binary_path.exists():
        return binary_path

    if os.name == "nt" and not name.endswith(".exe"):
        exe_path = target / profile / f"{name}.exe"
        if exe_path.exists():
            return exe_path

    raise BinaryNotFoundError(
        f"App binary '{name}' not found in target directory: {target}\n"
        f"Searched in:\n"
        f"- {binary_path}\n"
        f"Try building the app with 'cargo build --profile {profile}' first."
    )