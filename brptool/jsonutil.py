"""JSON and entity-argument helpers shared by the command implementations."""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any

_U64_MAX = 2**64 - 1
_U64_PATTERN = re.compile(r"\+?[0-9]+")


def parse_json_object(json_str: str, command_name: str) -> dict[str, Any]:
    """Parse ``json_str`` and require the result to be a JSON object."""
    value = json.loads(json_str)
    if not isinstance(value, dict):
        raise ValueError(f"{command_name} requires a JSON object")
    return value


def parse_json_value(json_str: str) -> Any:
    """Parse ``json_str`` into any JSON value."""
    return json.loads(json_str)


def format_json(value: Any) -> str:
    """Pretty-print a JSON value with two-space indentation."""
    return json.dumps(value, indent=2, ensure_ascii=False)


def print_json(value: Any) -> None:
    """Write a pretty-printed JSON value to standard output."""
    print(format_json(value))


def parse_entity_arg(args: Sequence[str]) -> int:
    """Parse the first argument as an unsigned 64-bit entity id."""
    if not args:
        raise ValueError("missing entity id argument")
    text = args[0]
    if not _U64_PATTERN.fullmatch(text):
        raise ValueError(f"invalid entity id: {text!r}")
    value = int(text)
    if value > _U64_MAX:
        raise ValueError(f"entity id out of range: {text!r}")
    return value