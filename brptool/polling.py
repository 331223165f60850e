"""Polling and TCP port helpers."""

from __future__ import annotations

import asyncio
import socket
from collections.abc import Awaitable, Callable

_LOCALHOST = "127.0.0.1"
_PORT_POLL_INTERVAL = 0.1


class PollTimeoutError(TimeoutError):
    """Raised when a polled condition is not met before the deadline."""


async def poll_until_ready(
    check_fn: Callable[[], Awaitable[object]],
    timeout: float,
    poll_interval: float,
    timeout_message: str,
) -> None:
    """Await ``check_fn`` every ``poll_interval`` seconds until it stops raising.

    Raises :class:`PollTimeoutError` with ``timeout_message`` once ``timeout``
    seconds have passed.
    """

    async def _poll() -> None:
        while True:
            try:
                await check_fn()
            except Exception:
                pass
            else:
                return
            await asyncio.sleep(poll_interval)

    try:
        await asyncio.wait_for(_poll(), timeout)
    except asyncio.TimeoutError:
        raise PollTimeoutError(str(timeout_message)) from None


def is_connection_error(error_str: str) -> bool:
    """Tell whether an error message means the server is not reachable at all."""
    return (
        "Connection refused" in error_str
        or "tcp connect error" in error_str
        or "error sending request" in error_str
    )


async def is_port_available(port: int) -> bool:
    """Return True if ``port`` on the loopback address can be bound."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((_LOCALHOST, port))
        except OSError:
            return False
    return True


async def _connect_once(port: int) -> None:
    _, writer = await asyncio.open_connection(_LOCALHOST, port)
    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass


async def wait_for_port_connectable(port: int, timeout: float) -> None:
    """Wait until something accepts TCP connections on ``port``.

    On timeout, the error tells apart a port nobody listens on from one held
    by another process.
    """
    try:
        await poll_until_ready(
            lambda: _connect_once(port),
            timeout,
            _PORT_POLL_INTERVAL,
            f"Timeout waiting for app to start on port {port}",
        )
    except PollTimeoutError:
        if await is_port_available(port):
            raise PollTimeoutError(
                f"Timeout waiting for app to start on port {port}. "
                "The app may have failed to start."
            ) from None
        raise PollTimeoutError(
            f"Port {port} is already in use by another process. "
            "Use -p/--port to specify a different port."
        ) from None