"""Readable error output for commands invoked without their required arguments."""

from __future__ import annotations

import sys
from collections.abc import Sequence

_ENTITY_ID_TYPE = "u64"
_ENTITY_ID_EXAMPLE = "12345"

_MIN_NAME_WIDTH = 10
_MIN_TYPE_WIDTH = 8
_EXAMPLE_RULE_WIDTH = 30


def _between(text: str, opener: str, closer: str) -> str | None:
    """Return the text after ``opener`` up to ``closer``, or None if either is missing."""
    start = text.find(opener)
    if start < 0:
        return None
    rest = text[start + len(opener):]
    end = rest.find(closer)
    if end < 0:
        return None
    return rest[:end]


def extract_type_and_example(help_text: str, arg_name: str) -> tuple[str, str]:
    """Derive a type label and an example value for an argument from its help text."""
    arg_type = "string"
    example = ""

    if arg_name in ("<ENTITY_ID>", "<CHILD_ID>"):
        arg_type = _ENTITY_ID_TYPE
        example = _ENTITY_ID_EXAMPLE
    elif arg_name == "<PARENT_ID>":
        arg_type = f"{_ENTITY_ID_TYPE}|null"
        example = "67890 or null"
    elif arg_name in ("<JSON>", "<JSON_PATCH>"):
        arg_type = "JSON"
        if "(e.g., '" in help_text:
            example = _between(help_text, "(e.g., '", "')") or ""
        elif "e.g., '" in help_text:
            example = _between(help_text, "e.g., '", "'") or ""
    elif arg_name == "<FILE_PATH>":
        arg_type = "path"
        example = "./screenshot.png"
    elif arg_name == "<COMPONENT_TYPES>...":
        arg_type = "string[]"
        found = _between(help_text, "(e.g., ", ")")
        if found is not None:
            example = found.replace("\n", " ").strip()
    else:
        example = _between(help_text, "(e.g., ", ")") or ""

    if "u64 integer" in help_text:
        arg_type = "u64"
    elif "JSON object" in help_text or "JSON patch" in help_text:
        arg_type = "JSON"

    return arg_type, example


def format_missing_args_error(
    command_name: str, missing_args: Sequence[tuple[str, str, str]]
) -> str:
    """Render the missing-arguments message as a table of name, type and example."""
    name_width = max([_MIN_NAME_WIDTH, *(len(name) for name, _, _ in missing_args)])
    type_width = max([_MIN_TYPE_WIDTH, *(len(kind) for _, kind, _ in missing_args)])

    def row(name: str, kind: str, example: str) -> str:
        return f"  {name:<{name_width}} {kind:<{type_width}} {example}"

    lines = [
        "error: missing required arguments",
        "",
        "Required arguments:",
        row("Name", "Type", "Example"),
        row("-" * name_width, "-" * type_width, "-" * _EXAMPLE_RULE_WIDTH),
    ]
    lines.extend(row(name, kind, example) for name, kind, example in missing_args)
    usage = " ".join(name for name, _, _ in missing_args)
    lines.extend(
        [
            "",
            f"Usage: {command_name} {usage}",
            "",
            "For more information, try '--help'.",
        ]
    )
    return "\n".join(lines)


def display_missing_args_error(
    command_name: str, missing_args: Sequence[tuple[str, str, str]]
) -> None:
    """Write the missing-arguments message to standard error."""
    print(format_missing_args_error(command_name, missing_args), file=sys.stderr)