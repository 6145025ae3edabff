"""Typed results for external tool invocations."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from enum import Enum


class Termination(str, Enum):
    """How an invoked process ended."""

    EXITED = "exited"
    STOPPED = "stopped"  # killed on purpose by a stop request
    TIMED_OUT = "timed_out"
    SPAWN_FAILED = "spawn_failed"


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one external command."""

    command: tuple[str, ...]
    exit_code: int | None
    stdout: str = ""
    stderr: str = ""
    termination: Termination = Termination.EXITED

    @property
    def command_line(self) -> str:
        return subprocess.list2cmdline(self.command)

    @property
    def is_error(self) -> bool:
        if self.termination is Termination.STOPPED:
            return False
        if self.termination is not Termination.EXITED:
            return True
        return self.exit_code != 0

    @property
    def error_text(self) -> str:
        """Text the tool reported its failure with (stderr, else stdout)."""
        if self.stderr.strip():
            return self.stderr
        return self.stdout

    @property
    def failure_text(self) -> str:
        """Error text headed by a "Command failed: <command>" line."""
        return f"Command failed: {self.command_line}\n{self.error_text}"

    @property
    def first_error_line(self) -> str | None:
        for line in self.error_text.splitlines():
            if line.strip():
                return line.strip()
        return None

    def to_dict(self) -> dict:
        result: dict = {
            "command": self.command_line,
            "exit_code": self.exit_code,
            "termination": self.termination.value,
        }
        if self.stdout:
            result["stdout"] = self.stdout
        if self.stderr:
            result["stderr"] = self.stderr
        return result
