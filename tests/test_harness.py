"""Tests for ProcessHarness and command resolution."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from seedfuzz.core.exceptions import CommandNotFoundError, HarnessError
from seedfuzz.core.harness import ProcessHarness, _decode_output, resolve_command
from seedfuzz.core.schema import Verdict

from _helpers import make_target, posix_only


def test_resolve_command_found(tmp_path: Path) -> None:
    (tmp_path / "target").write_text("")
    assert resolve_command("target", tmp_path) == tmp_path / "target"


def test_resolve_command_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(CommandNotFoundError, match="Could not find command 'missing'"):
        resolve_command("missing", tmp_path)


def test_decode_output_normalizes_line_endings() -> None:
    assert _decode_output(b"a\r\nb\rc\n") == "a\nb\nc\n"


def test_decode_output_replaces_invalid_bytes() -> None:
    assert _decode_output(b"ok\xff") == "ok�"


@posix_only
def test_execute_echo_target(echo_target: Path) -> None:
    harness = ProcessHarness("./echo_target.sh", working_directory=echo_target.parent)
    result = harness.execute('a a="value">...</html>')
    assert result.exit_code == 0
    assert result.output == 'a a="value">...</html>'
    assert result.timed_out is False
    assert result.verdict is Verdict.ACCEPTED


@posix_only
def test_execute_merges_stderr(tmp_path: Path) -> None:
    make_target(tmp_path, "both.sh", "cat\necho ' err' >&2")
    result = ProcessHarness("./both.sh", working_directory=tmp_path).execute("out")
    assert result.output == "out err\n"


@posix_only
def test_execute_non_zero_exit(failing_target: Path) -> None:
    harness = ProcessHarness("./failing_target.sh", working_directory=failing_target.parent)
    result = harness.execute("anything")
    assert result.exit_code == 2
    assert result.output == "parse error\n"
    assert result.verdict is Verdict.REJECTED


@posix_only
def test_execute_runs_in_working_directory(tmp_path: Path) -> None:
    make_target(tmp_path, "where.sh", "cat >/dev/null\npwd")
    result = ProcessHarness("./where.sh", working_directory=tmp_path).execute("")
    assert Path(result.output.strip()).resolve() == tmp_path.resolve()


@posix_only
def test_execute_closes_stdin(tmp_path: Path) -> None:
    make_target(tmp_path, "count.sh", "wc -c")
    result = ProcessHarness("./count.sh", working_directory=tmp_path).execute("héllo")
    assert result.output.strip() == "6"


@posix_only
def test_execute_timeout_kills_target(tmp_path: Path) -> None:
    make_target(tmp_path, "hang.sh", "sleep 30")
    harness = ProcessHarness("./hang.sh", working_directory=tmp_path, timeout=0.5)
    result = harness.execute("x")
    assert result.timed_out is True
    assert result.exit_code is None
    assert result.verdict is Verdict.TIMEOUT
    assert result.duration_seconds < 10


@posix_only
def test_execute_target_ignoring_stdin(tmp_path: Path) -> None:
    make_target(tmp_path, "noread.sh", "echo done")
    result = ProcessHarness("./noread.sh", working_directory=tmp_path).execute("x" * 200_000)
    assert result.exit_code == 0
    assert result.output == "done\n"


@posix_only
def test_execute_unknown_command_is_rejected_by_shell(tmp_path: Path) -> None:
    result = ProcessHarness("./does-not-exist", working_directory=tmp_path).execute("x")
    assert result.exit_code == 127


def test_execute_missing_working_directory_raises(tmp_path: Path) -> None:
    harness = ProcessHarness("./target.sh", working_directory=tmp_path / "gone")
    with pytest.raises(HarnessError, match="Failed to start"):
        harness.execute("x")


@posix_only
def test_execute_interrupt_kills_target_and_propagates(
    echo_target: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    killed: list[subprocess.Popen] = []
    real_kill = ProcessHarness._kill

    def _kill(proc: subprocess.Popen) -> None:
        killed.append(proc)
        real_kill(proc)

    def _interrupt(self, input=None, timeout=None):
        raise KeyboardInterrupt

    monkeypatch.setattr(ProcessHarness, "_kill", staticmethod(_kill))
    monkeypatch.setattr(subprocess.Popen, "communicate", _interrupt)
    harness = ProcessHarness("./echo_target.sh", working_directory=echo_target.parent)
    with pytest.raises(KeyboardInterrupt):
        harness.execute("x")
    assert len(killed) == 1
    proc = killed[0]
    assert proc.returncode is not None
    assert proc.stdin.closed
    assert proc.stdout.closed
