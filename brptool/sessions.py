"""Bookkeeping for detached app sessions kept in the temporary directory."""

from __future__ import annotations

import json
import os
import sys
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import psutil

from .constants import BIN_NAME

_NANOS_PER_SECOND = 1_000_000_000


def _temp_root(temp_dir: str | os.PathLike[str] | None) -> Path:
    return Path(temp_dir) if temp_dir is not None else Path(tempfile.gettempdir())


def _encode_time(timestamp: float) -> dict[str, int]:
    secs = int(timestamp)
    nanos = int(round((timestamp - secs) * _NANOS_PER_SECOND))
    if nanos >= _NANOS_PER_SECOND:
        secs += 1
        nanos -= _NANOS_PER_SECOND
    return {"secs_since_epoch": secs, "nanos_since_epoch": nanos}


def _decode_time(value: Any) -> float:
    if isinstance(value, dict):
        return int(value["secs_since_epoch"]) + int(value["nanos_since_epoch"]) / _NANOS_PER_SECOND
    if isinstance(value, (int, float)):
        return float(value)
    raise ValueError(f"invalid start_time: {value!r}")


@dataclass
class SessionInfo:
    """What is stored about a detached session."""

    pid: int
    port: int
    log_file: Path
    app_binary: str
    start_time: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        self.log_file = Path(self.log_file)

    def to_json(self) -> str:
        """Serialise to pretty-printed JSON."""
        return json.dumps(
            {
                "pid": self.pid,
                "port": self.port,
                "log_file": str(self.log_file),
                "start_time": _encode_time(self.start_time),
                "app_binary": self.app_binary,
            },
            indent=2,
        )

    @classmethod
    def from_json(cls, text: str) -> SessionInfo:
        """Parse the JSON written by :meth:`to_json`; raise ValueError if malformed."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("session info must be a JSON object")
        try:
            return cls(
                pid=int(data["pid"]),
                port=int(data["port"]),
                log_file=Path(data["log_file"]),
                app_binary=str(data["app_binary"]),
                start_time=_decode_time(data["start_time"]),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid session info: {exc}") from exc


def session_prefix() -> str:
    """Prefix shared by every session file name."""
    return f"{BIN_NAME}_session"


def session_info_path(port: int, temp_dir: str | os.PathLike[str] | None = None) -> Path:
    """Path of the session info file for ``port``."""
    return _temp_root(temp_dir) / f"{session_prefix()}_port_{port}.json"


def session_log_path(timestamp: int, temp_dir: str | os.PathLike[str] | None = None) -> Path:
    """Path of a session log file named after a millisecond ``timestamp``."""
    return _temp_root(temp_dir) / f"{session_prefix()}_{timestamp}.log"


def format_duration(seconds: int) -> str:
    """Render seconds as ``Hh Mm Ss``, dropping leading zero units."""
    seconds = int(seconds)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def is_process_alive(pid: int) -> bool:
    """Tell whether a process with ``pid`` exists."""
    try:
        return psutil.pid_exists(pid)
    except (OverflowError, ValueError):
        return False


def kill_process(pid: int) -> None:
    """Kill the process ``pid``; a process that is already gone is not an error."""
    try:
        psutil.Process(pid).kill()
    except psutil.NoSuchProcess:
        pass


def save_session_info(info: SessionInfo, temp_dir: str | os.PathLike[str] | None = None) -> Path:
    """Write ``info`` to its session info file and return the file's path."""
    path = session_info_path(info.port, temp_dir)
    try:
        path.write_text(info.to_json(), encoding="utf-8")
    except OSError as exc:
        raise OSError(f"Failed to save session info to {path}: {exc}") from exc
    return path


def session_status(
    port: int, app_running: bool, temp_dir: str | os.PathLike[str] | None = None
) -> dict[str, Any] | None:
    """Describe the session on ``port``, or return None if there is none.

    ``app_running`` says whether an app answers on the port. A stale info file,
    whose app neither answers nor has a live process, is removed.
    """
    path = session_info_path(port, temp_dir)
    if not path.exists():
        if app_running:
            return {
                "app_running": True,
                "port": port,
                "message": "App is running but no session info found (may have been started manually)",
            }
        return None

    info = SessionInfo.from_json(path.read_text(encoding="utf-8"))
    uptime_seconds = max(0, int(time.time() - info.start_time))
    process_alive = is_process_alive(info.pid)

    status = {
        "app_running": app_running,
        "process_alive": process_alive,
        "pid": info.pid,
        "port": info.port,
        "log_file": str(info.log_file),
        "app_binary": info.app_binary,
        "start_time": _encode_time(info.start_time),
        "uptime_seconds": uptime_seconds,
        "uptime_formatted": format_duration(uptime_seconds),
    }

    if not app_running and not process_alive:
        try:
            path.unlink()
        except OSError:
            pass

    return status


def cleanup_all_logs(temp_dir: str | os.PathLike[str] | None = None) -> dict[str, int]:
    """Remove session files of sessions whose process has ended.

    Returns the counts under ``removed``, ``preserved`` and ``errors``.
    """
    root = _temp_root(temp_dir)
    prefix = session_prefix()
    active: set[Path] = set()

    for path in sorted(root.iterdir()):
        name = path.name
        if not (name.startswith(prefix) and name.endswith(".json")):
            continue
        try:
            contents = path.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Failed to read {name}: {exc}", file=sys.stderr)
            continue
        try:
            info = SessionInfo.from_json(contents)
        except ValueError as exc:
            print(f"Failed to parse session info from {name}: {exc}", file=sys.stderr)
            continue
        if is_process_alive(info.pid):
            active.add(path)
            if info.log_file.name:
                active.add(root / info.log_file.name)
            print(f"Found active session on port {info.port} (PID: {info.pid})")

    removed = preserved = errors = 0
    for path in sorted(root.iterdir()):
        name = path.name
        is_log = name.endswith(".log")
        if not (name.startswith(prefix) and (is_log or name.endswith(".json"))):
            continue
        kind = "log file" if is_log else "session info"
        if path in active:
            print(f"Preserving active {kind}: {name}")
            preserved += 1
            continue
        try:
            path.unlink()
        except OSError as exc:
            print(f"Failed to remove {name}: {exc}", file=sys.stderr)
            errors += 1
        else:
            print(f"Removed inactive {kind}: {name}")
            removed += 1

    if removed == 0 and errors == 0 and preserved == 0:
        print(f"No {BIN_NAME} session files found")
    else:
        print("\nCleanup complete:")
        if removed:
            print(f"  - {removed} inactive files removed")
        if preserved:
            print(f"  - {preserved} active session files preserved")
        if errors:
            print(f"  - {errors} files could not be removed (errors)")

    return {"removed": removed, "preserved": preserved, "errors": errors}