"""Force-stop processes by executable name (tasklist / taskkill)."""

from __future__ import annotations

import logging

from asm_runner.process.runner import ProcessRunner

logger = logging.getLogger(__name__)

_LIST_COMMAND = ("tasklist",)


class ProcessTerminator:
    """Best-effort, idempotent process killer.

    Never raises: failures of the listing or kill commands are logged and
    the caller carries on.
    """

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._runner = runner or ProcessRunner()
        self._timeout = timeout

    def is_running(self, executable: str) -> bool | None:
        """Check the process list for executable.

        Returns None when the list couldn't be read.
        """
        listing = self._runner.run(_LIST_COMMAND, timeout=self._timeout)
        if listing.is_error:
            logger.error(
                f"Error checking for running processes: "
                f"{listing.first_error_line or listing.termination.value}"
            )
            return None
        return executable.lower() in listing.stdout.lower()

    def ensure_stopped(self, executable: str | None) -> bool:
        """Kill every process named executable if one is running.

        Returns True when a kill was issued.
        """
        if not executable:
            return False

        running = self.is_running(executable)
        if not running:
            if running is False:
                logger.debug(f"The executable {executable} is not running.")
            return False

        logger.info(f"The executable {executable} is running. Stopping it...")
        result = self._runner.run(
            ("taskkill", "/F", "/IM", executable),
            timeout=self._timeout,
        )
        if result.is_error:
            logger.error(
                f"Error stopping {executable}: "
                f"{result.first_error_line or result.termination.value}"
            )
        else:
            logger.info(f"{executable} has been successfully stopped.")
        return True
