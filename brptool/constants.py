"""Shared constants for the remote-control tool."""

DEFAULT_REMOTE_PORT = 15702
"""Default port for remote control connections.

Matches the default port of the remote HTTP endpoint, so apps that only expose
the standard remote protocol are reachable on it as well.
"""

BIN_NAME = "brp"
"""Name of the command-line program."""