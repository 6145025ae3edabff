"""Run a single external command to completion and capture its output."""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Sequence

from asm_runner.process.types import Termination, ToolResult

logger = logging.getLogger(__name__)


class ProcessRunner:
    """Blocking command runner.

    Failing exits are reported in the returned ToolResult, never raised.
    A stop_event that is set by the time the process ends marks the result
    as intentionally stopped, which is not an error.
    """

    def run(
        self,
        command: Sequence[str],
        timeout: float | None = None,
        stop_event: threading.Event | None = None,
    ) -> ToolResult:
        cmd = tuple(command)
        logger.debug(f"Running {subprocess.list2cmdline(cmd)}")

        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning(f"{cmd[0]} timed out after {timeout}s")
            return ToolResult(
                command=cmd,
                exit_code=None,
                stdout=_as_text(e.stdout),
                stderr=_as_text(e.stderr) or f"Timed out after {timeout}s",
                termination=Termination.TIMED_OUT,
            )
        except OSError as e:
            logger.error(f"Error starting {cmd[0]}: {e}")
            return ToolResult(
                command=cmd,
                exit_code=None,
                stderr=str(e),
                termination=Termination.SPAWN_FAILED,
            )

        termination = Termination.EXITED
        if stop_event is not None and stop_event.is_set():
            termination = Termination.STOPPED

        result = ToolResult(
            command=cmd,
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            termination=termination,
        )
        if result.is_error:
            logger.debug(f"{cmd[0]} exited with code {completed.returncode}")
        return result


def _as_text(data: bytes | str | None) -> str:
    # TimeoutExpired carries bytes even when the run was in text mode
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
