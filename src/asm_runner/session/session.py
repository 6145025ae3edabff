"""Session record: the tracked target and the debug-running flag."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum

from asm_runner.process.types import ToolResult


class SessionState(str, Enum):
    IDLE = "idle"
    STOPPING = "stopping"
    BUILDING = "building"
    LAUNCHING = "launching"
    RUNNING = "running"
    CLEANING = "cleaning"


@dataclass
class Session:
    """The current debug/run attempt."""

    target_executable: str | None = None  # e.g. "hello.exe"
    is_running: bool = False
    state: SessionState = SessionState.IDLE
    mode: str | None = None  # "debug" or "run"
    source_file: str | None = None
    last_result: ToolResult | None = None
    last_error: str | None = None
    updated_at: float = field(default_factory=time.monotonic)

    @property
    def is_busy(self) -> bool:
        return self.state is not SessionState.IDLE

    def to_dict(self) -> dict:
        result: dict = {
            "state": self.state.value,
            "running": self.is_running,
        }
        if self.mode:
            result["mode"] = self.mode
        if self.source_file:
            result["source_file"] = self.source_file
        if self.target_executable:
            result["target"] = self.target_executable
        if self.last_result is not None:
            result["exit_code"] = self.last_result.exit_code
            result["termination"] = self.last_result.termination.value
        if self.last_error:
            result["last_error"] = self.last_error
        return result
