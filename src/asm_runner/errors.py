"""Exception hierarchy for the assembly runner."""

from __future__ import annotations

from typing import Any


class AsmRunnerError(Exception):
    """Base exception for all runner errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code, **self.details}


class ConfigurationError(AsmRunnerError):
    """A precondition (toolchain root, active source file) is missing."""

    def __init__(self, message: str, missing: str):
        super().__init__(
            code="CONFIGURATION_ERROR",
            message=message,
            details={"missing": missing},
        )


class BuildError(AsmRunnerError):
    """The assembler or linker failed."""

    def __init__(
        self,
        stage: str,
        message: str,
        diagnostic: dict | None = None,
        result: dict | None = None,
    ):
        details: dict[str, Any] = {"stage": stage}
        if diagnostic is not None:
            details["diagnostic"] = diagnostic
        if result is not None:
            details["result"] = result
        super().__init__(code="BUILD_FAILED", message=message, details=details)
        self.stage = stage
        self.diagnostic = diagnostic


class SessionBusyError(AsmRunnerError):
    """A debug or run is already in flight."""

    def __init__(self, state: str):
        super().__init__(
            code="SESSION_BUSY",
            message=f"Another operation is in progress (state '{state}'). "
            "Stop it before starting a new one.",
            details={"state": state},
        )


class LaunchError(AsmRunnerError):
    """The built program couldn't be started."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="LAUNCH_FAILED",
            message=f"Failed to launch target: {reason}",
            details=details or {},
        )
