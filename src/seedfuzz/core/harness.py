"""Process harness: run the target once per input over its standard input."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import time
from pathlib import Path

from seedfuzz.core.exceptions import CommandNotFoundError, HarnessError
from seedfuzz.core.schema import ExecutionResult

log = logging.getLogger(__name__)

_POSIX = os.name == "posix"


def resolve_command(command: str, working_directory: Path) -> Path:
    """Return the on-disk path of ``command`` under ``working_directory``.

    Raises CommandNotFoundError if it does not exist.
    """
    path = Path(working_directory) / command
    if not path.exists():
        raise CommandNotFoundError(f"Could not find command '{command}'.")
    return path


def _decode_output(raw: bytes) -> str:
    """Decode merged stdout/stderr, normalizing line endings to ``\\n``."""
    text = raw.decode("utf-8", errors="replace")
    return text.replace("\r\n", "\n").replace("\r", "\n")


class ProcessHarness:
    """Spawns the target through the host shell, one child process per input.

    The command string is passed to the platform shell unchanged
    (``sh -c`` on POSIX, ``cmd.exe /c`` on Windows). ``timeout`` is in
    seconds; None waits for the child forever.
    """

    def __init__(
        self,
        command: str,
        working_directory: Path | str = ".",
        timeout: float | None = None,
    ) -> None:
        self.command = command
        self.working_directory = Path(working_directory)
        self.timeout = timeout

    def execute(self, input_text: str) -> ExecutionResult:
        """Feed ``input_text`` to a fresh child process and collect its exit code and output."""
        data = input_text.encode("utf-8")
        start = time.monotonic()
        try:
            proc = subprocess.Popen(
                self.command,
                shell=True,
                cwd=str(self.working_directory),
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                start_new_session=_POSIX,
            )
        except OSError as e:
            raise HarnessError(f"Failed to start {self.command!r}: {e}") from e

        with proc:
            try:
                out, _ = proc.communicate(input=data, timeout=self.timeout)
            except subprocess.TimeoutExpired:
                log.warning("Target exceeded %ss deadline; killing it", self.timeout)
                self._kill(proc)
                out, _ = proc.communicate()
                return ExecutionResult(
                    exit_code=None,
                    output=_decode_output(out or b""),
                    timed_out=True,
                    duration_seconds=time.monotonic() - start,
                )
            except OSError as e:
                self._kill(proc)
                proc.wait()
                raise HarnessError(str(e)) from e
            except BaseException:
                self._kill(proc)
                proc.wait()
                raise

        duration = time.monotonic() - start
        log.debug("Target exited with %d after %.3fs", proc.returncode, duration)
        return ExecutionResult(
            exit_code=proc.returncode,
            output=_decode_output(out),
            duration_seconds=duration,
        )

    @staticmethod
    def _kill(proc: subprocess.Popen) -> None:
        """Kill the child; on POSIX the whole process group so the shell's children die too."""
        if proc.poll() is not None:
            return
        if _POSIX:
            try:
                os.killpg(proc.pid, signal.SIGKILL)
                return
            except ProcessLookupError:
                return
            except OSError as e:
                log.debug("killpg failed for %d: %s", proc.pid, e)
        proc.kill()
