"""Helpers for managed mode: command lists, wait commands and port selection."""

from __future__ import annotations

import random
import re

from .polling import is_port_available

_WAIT_PREFIX = "wait:"
_U64_MAX = 2**64 - 1
_U64_PATTERN = re.compile(r"\+?[0-9]+")

_MIN_PORT = 15703
_MAX_PORT = 16702
_MAX_ATTEMPTS = 50


def parse_command_list(text: str) -> list[str]:
    """Split a comma-separated command list, keeping commas inside JSON intact."""
    commands: list[str] = []
    current: list[str] = []
    in_json = False
    in_string = False
    escape_next = False
    brace_count = 0

    def flush() -> None:
        command = "".join(current).strip()
        if command:
            commands.append(command)
        current.clear()

    for ch in text:
        if escape_next:
            current.append(ch)
            escape_next = False
            continue
        if ch == "\\" and in_json:
            current.append(ch)
            escape_next = True
        elif ch == '"' and in_json:
            current.append(ch)
            in_string = not in_string
        elif ch == "{" and not in_string:
            in_json = True
            brace_count += 1
            current.append(ch)
        elif ch == "}" and not in_string and in_json:
            brace_count -= 1
            current.append(ch)
            if brace_count == 0:
                in_json = False
        elif ch == "," and not in_json:
            flush()
        else:
            current.append(ch)

    flush()
    return commands


def parse_wait_command(command: str) -> int | None:
    """Return the seconds of a ``wait:N`` command, or None for any other command.

    Raises ValueError when N is not an unsigned integer.
    """
    command = command.strip()
    if not command.startswith(_WAIT_PREFIX):
        return None
    text = command[len(_WAIT_PREFIX):]
    if not _U64_PATTERN.fullmatch(text) or int(text) > _U64_MAX:
        raise ValueError(f"Invalid wait command: {command}")
    return int(text)


async def pick_random_available_port() -> int:
    """Choose a free port for a managed instance, just above the default port."""
    for _ in range(_MAX_ATTEMPTS):
        port = random.randint(_MIN_PORT, _MAX_PORT)
        if await is_port_available(port):
            print(f"Selected random port: {port}")
            return port
    raise RuntimeError(
        f"Could not find an available port after {_MAX_ATTEMPTS} attempts"
    )