"""Building blocks for tools that talk to apps over the Bevy Remote Protocol."""

__version__ = "0.1.0"

__all__ = [
    "argsformat",
    "binaries",
    "constants",
    "jsonutil",
    "managed",
    "params",
    "polling",
    "sessions",
    "sse",
]