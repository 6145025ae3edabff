"""Open an interactive console running a built program."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence

logger = logging.getLogger(__name__)


class TerminalLauncher:
    """Starts a program in its own console window and returns immediately.

    On Windows this is `start "<title>" cmd /k <program>` so the window stays
    open after the program exits. Elsewhere the program is started detached
    in a new session (e.g. through wine's binfmt handler).
    """

    def __init__(self, title: str = "Assembly") -> None:
        self._title = title

    def launch(self, command: Sequence[str]) -> subprocess.Popen:
        invocation = subprocess.list2cmdline(list(command))
        logger.info(f"Opening terminal '{self._title}': {invocation}")

        if os.name == "nt":
            return subprocess.Popen(
                f'start "{self._title}" cmd /k {invocation}',
                shell=True,
            )
        return subprocess.Popen(list(command), start_new_session=True)
