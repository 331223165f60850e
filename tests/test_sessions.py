import json
import os
import subprocess
import sys
import time
from pathlib import Path

import pytest

from brptool.constants import BIN_NAME
from brptool.sessions import (
    SessionInfo,
    cleanup_all_logs,
    format_duration,
    is_process_alive,
    kill_process,
    save_session_info,
    session_info_path,
    session_log_path,
    session_prefix,
    session_status,
)

DEAD_PID = 99_999_999


def make_info(tmp_path, pid, port=15702, timestamp=1234):
    return SessionInfo(
        pid=pid,
        port=port,
        log_file=session_log_path(timestamp, tmp_path),
        app_binary="my_game",
    )


def test_session_prefix_uses_bin_name():
    assert session_prefix() == f"{BIN_NAME}_session"


def test_info_path_layout(tmp_path):
    path = session_info_path(15702, tmp_path)
    assert path.parent == tmp_path
    assert path.name.startswith(session_prefix())
    assert path.name.endswith(".json")
    assert "15702" in path.name


def test_log_path_layout(tmp_path):
    path = session_log_path(1700000000123, tmp_path)
    assert path.parent == tmp_path
    assert path.name.startswith(session_prefix())
    assert path.suffix == ".log"
    assert "1700000000123" in path.name


def test_info_and_log_paths_differ(tmp_path):
    assert session_info_path(1, tmp_path) != session_log_path(1, tmp_path)


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0s"), (61, "1m 1s"), (3661, "1h 1m 1s")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_format_duration_below_minute_is_seconds_only():
    assert format_duration(59) == "59s"


def test_session_info_round_trip(tmp_path):
    info = SessionInfo(
        pid=42,
        port=15800,
        log_file=tmp_path / "a.log",
        app_binary="app",
        start_time=1700000000.5,
    )
    restored = SessionInfo.from_json(info.to_json())
    assert restored == info


def test_session_info_start_time_format():
    info = SessionInfo(pid=1, port=2, log_file=Path("x.log"), app_binary="a", start_time=10.5)
    data = json.loads(info.to_json())
    assert data["start_time"]["secs_since_epoch"] == 10
    assert data["start_time"]["nanos_since_epoch"] == 500_000_000


def test_session_info_from_json_missing_field():
    with pytest.raises(ValueError):
        SessionInfo.from_json(json.dumps({"pid": 1, "port": 2}))


def test_session_info_from_json_not_object():
    with pytest.raises(ValueError):
        SessionInfo.from_json("[1, 2]")


def test_is_process_alive():
    assert is_process_alive(os.getpid()) is True
    assert is_process_alive(DEAD_PID) is False


def test_kill_process_terminates_child():
    proc = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
    assert is_process_alive(proc.pid) is True
    kill_process(proc.pid)
    proc.wait(timeout=10)
    assert proc.returncode != 0
    assert is_process_alive(proc.pid) is False


def test_save_session_info_writes_file(tmp_path):
    info = make_info(tmp_path, os.getpid())
    path = save_session_info(info, tmp_path)
    assert path == session_info_path(info.port, tmp_path)
    assert SessionInfo.from_json(path.read_text()) == info


def test_status_without_file_and_no_app(tmp_path):
    assert session_status(15702, False, tmp_path) is None


def test_status_without_file_but_app_running(tmp_path):
    status = session_status(15710, True, tmp_path)
    assert status["app_running"] is True
    assert status["port"] == 15710
    assert "no session info" in status["message"]


def test_status_of_live_session(tmp_path):
    info = make_info(tmp_path, os.getpid(), port=15720)
    info.start_time = time.time() - 5
    path = save_session_info(info, tmp_path)
    status = session_status(15720, False, tmp_path)
    assert status["process_alive"] is True
    assert status["pid"] == os.getpid()
    assert status["app_binary"] == "my_game"
    assert status["uptime_seconds"] >= 5
    assert status["uptime_formatted"] == format_duration(status["uptime_seconds"])
    assert path.exists()


def test_status_removes_stale_session(tmp_path):
    info = make_info(tmp_path, DEAD_PID, port=15730)
    path = save_session_info(info, tmp_path)
    status = session_status(15730, False, tmp_path)
    assert status["process_alive"] is False
    assert status["app_running"] is False
    assert not path.exists()


def test_status_keeps_file_when_app_answers(tmp_path):
    info = make_info(tmp_path, DEAD_PID, port=15740)
    path = save_session_info(info, tmp_path)
    status = session_status(15740, True, tmp_path)
    assert status["app_running"] is True
    assert path.exists()


def test_cleanup_with_nothing_to_do(tmp_path, capsys):
    counts = cleanup_all_logs(tmp_path)
    assert counts == {"removed": 0, "preserved": 0, "errors": 0}
    assert f"No {BIN_NAME} session files found" in capsys.readouterr().out


def test_cleanup_preserves_active_and_removes_inactive(tmp_path):
    live = make_info(tmp_path, os.getpid(), port=15750, timestamp=1)
    live.log_file.write_text("live log")
    live_path = save_session_info(live, tmp_path)

    dead = make_info(tmp_path, DEAD_PID, port=15751, timestamp=2)
    dead.log_file.write_text("dead log")
    dead_path = save_session_info(dead, tmp_path)

    orphan_log = session_log_path(3, tmp_path)
    orphan_log.write_text("orphan")
    unrelated = tmp_path / "other.log"
    unrelated.write_text("keep me")

    counts = cleanup_all_logs(tmp_path)

    assert counts["preserved"] == 2
    assert counts["removed"] == 3
    assert counts["errors"] == 0
    assert live_path.exists() and live.log_file.exists()
    assert not dead_path.exists() and not dead.log_file.exists()
    assert not orphan_log.exists()
    assert unrelated.exists()


def test_cleanup_removes_malformed_session_file(tmp_path):
    bad = session_info_path(15760, tmp_path)
    bad.write_text("not json")
    counts = cleanup_all_logs(tmp_path)
    assert counts["removed"] == 1
    assert not bad.exists()