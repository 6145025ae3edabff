"""Session orchestrator: stop, build, launch and clean up, one at a time."""

from __future__ import annotations

import logging
import os
import threading
import time
from dataclasses import replace
from pathlib import Path

from asm_runner.build.artifacts import BuildArtifacts
from asm_runner.build.diagnostics import DiagnosticSet
from asm_runner.build.pipeline import BuildPipeline
from asm_runner.config import Settings
from asm_runner.config import settings as default_settings
from asm_runner.errors import ConfigurationError, LaunchError, SessionBusyError
from asm_runner.process.runner import ProcessRunner
from asm_runner.process.terminal import TerminalLauncher
from asm_runner.process.terminator import ProcessTerminator
from asm_runner.process.types import Termination
from asm_runner.session.session import Session, SessionState
from asm_runner.toolchain import DEBUGGER_EXECUTABLE, Toolchain, resolve_toolchain

logger = logging.getLogger(__name__)


class SessionOrchestrator:
    """Owns the single Session and serializes debug/run invocations.

    debug() and run() are rejected with SessionBusyError while another one is
    in flight. stop() is always accepted: it is the cancellation path and
    works by force-killing the debugger and the tracked target by name.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        runner: ProcessRunner | None = None,
        terminator: ProcessTerminator | None = None,
        launcher: TerminalLauncher | None = None,
        diagnostics: DiagnosticSet | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._runner = runner or ProcessRunner()
        self._terminator = terminator or ProcessTerminator(
            self._runner,
            timeout=self._settings.process_query_timeout_seconds,
        )
        self._launcher = launcher or TerminalLauncher(self._settings.terminal_title)
        self._diagnostics = diagnostics or DiagnosticSet()

        self._session = Session()
        self._lock = threading.Lock()
        self._stop_requested = threading.Event()
        self._worker: threading.Thread | None = None

    @property
    def session(self) -> Session:
        """Snapshot of the current session."""
        with self._lock:
            return replace(self._session)

    @property
    def diagnostics(self) -> DiagnosticSet:
        return self._diagnostics

    def toolchain(self, toolchain_root: str | Path | None = None) -> Toolchain:
        """Resolve the toolchain from the argument or the configured root."""
        root = toolchain_root if toolchain_root else self._settings.toolchain_root
        return resolve_toolchain(root, entry_point=self._settings.entry_point)

    def debug(
        self,
        source_file: str | None,
        toolchain_root: str | Path | None = None,
        wait: bool = True,
    ) -> Session:
        """Build source_file and open the result in the debugger.

        With wait=True this blocks until the debugger exits or is killed by
        stop(); the artifacts are then deleted. With wait=False the debugger
        is watched from a background thread and this returns once it has
        been started.

        Raises:
            ConfigurationError: Missing source file or toolchain root.
            SessionBusyError: Another debug/run is in flight.
            BuildError: Assembly or linking failed.
        """
        toolchain = self._check_preconditions(source_file, toolchain_root)
        self._begin("debug", source_file)
        try:
            self._stop_processes(DEBUGGER_EXECUTABLE, self._tracked_target())

            self._set_state(SessionState.BUILDING)
            artifacts = self._pipeline(toolchain).build(
                source_file,
                console_subsystem=self._settings.show_terminal_in_debug_mode,
            )

            if self._stop_requested.is_set():
                logger.info("Stop requested during build, not launching debugger")
                artifacts.remove()
                self._finish()
                return self.session

            self._set_state(SessionState.LAUNCHING)
            with self._lock:
                self._session.target_executable = artifacts.executable_name
                self._session.is_running = True
                self._session.state = SessionState.RUNNING
        except BaseException:
            self._finish()
            raise

        if wait:
            self._debug_target(toolchain, artifacts)
        else:
            worker = threading.Thread(
                target=self._debug_target,
                args=(toolchain, artifacts),
                daemon=True,
                name="asm-debugger",
            )
            with self._lock:
                self._worker = worker
            worker.start()

        return self.session

    def run(
        self,
        source_file: str | None,
        toolchain_root: str | Path | None = None,
    ) -> Session:
        """Build source_file and start it in an interactive terminal.

        Does not wait for the program. The artifacts are kept so the
        executable stays runnable and can be stopped later.

        Raises:
            ConfigurationError: Missing source file or toolchain root.
            SessionBusyError: Another debug/run is in flight.
            BuildError: Assembly or linking failed.
            LaunchError: The terminal couldn't be opened.
        """
        toolchain = self._check_preconditions(source_file, toolchain_root)
        self._begin("run", source_file)
        try:
            self._stop_processes(self._tracked_target())

            self._set_state(SessionState.BUILDING)
            artifacts = self._pipeline(toolchain).build(
                source_file, console_subsystem=True
            )

            if self._stop_requested.is_set():
                logger.info("Stop requested during build, not launching target")
            else:
                self._set_state(SessionState.LAUNCHING)
                try:
                    self._launcher.launch([artifacts.executable])
                except OSError as e:
                    raise LaunchError(
                        str(e), details={"executable": artifacts.executable}
                    ) from e

                with self._lock:
                    self._session.target_executable = artifacts.executable_name
        finally:
            self._finish()

        return self.session

    def stop(self) -> Session:
        """Kill the debugger and the tracked target. Safe when nothing runs."""
        self._stop_requested.set()
        with self._lock:
            target = self._session.target_executable
            worker = self._worker
            idle = not self._session.is_busy
            if idle:
                self._session.state = SessionState.STOPPING

        self._stop_processes(DEBUGGER_EXECUTABLE, target)

        with self._lock:
            self._session.is_running = False
            if idle:
                self._session.state = SessionState.IDLE

        if (
            worker is not None
            and worker.is_alive()
            and worker is not threading.current_thread()
        ):
            worker.join(timeout=self._settings.stop_wait_seconds)

        return self.session

    def shutdown(self) -> None:
        """Stop anything this orchestrator started. Used at server exit."""
        with self._lock:
            active = self._session.is_busy or self._session.target_executable
        if active:
            self.stop()

    # -- internals -------------------------------------------------------

    def _check_preconditions(
        self,
        source_file: str | None,
        toolchain_root: str | Path | None,
    ) -> Toolchain:
        toolchain = self.toolchain(toolchain_root)
        if not source_file:
            raise ConfigurationError("No source file given", missing="source_file")
        if not os.path.isfile(source_file):
            raise ConfigurationError(
                f"Source file '{source_file}' does not exist", missing="source_file"
            )
        return toolchain

    def _pipeline(self, toolchain: Toolchain) -> BuildPipeline:
        return BuildPipeline(
            toolchain,
            self._runner,
            self._diagnostics,
            timeout=self._settings.build_timeout_seconds,
        )

    def _tracked_target(self) -> str | None:
        with self._lock:
            return self._session.target_executable

    def _begin(self, mode: str, source_file: str) -> None:
        with self._lock:
            if self._session.is_busy:
                raise SessionBusyError(self._session.state.value)
            self._session.state = SessionState.STOPPING
            self._session.is_running = False
            self._session.mode = mode
            self._session.source_file = source_file
            self._session.last_result = None
            self._session.last_error = None
        self._stop_requested.clear()
        logger.info(f"{mode}: {source_file}")

    def _finish(self) -> None:
        with self._lock:
            self._session.is_running = False
            self._session.state = SessionState.IDLE
            self._session.updated_at = time.monotonic()

    def _set_state(self, state: SessionState) -> None:
        with self._lock:
            self._session.state = state
            self._session.updated_at = time.monotonic()
        logger.debug(f"Session state: {state.value}")

    def _stop_processes(self, *executables: str | None) -> None:
        for executable in executables:
            self._terminator.ensure_stopped(executable)

    def _debug_target(self, toolchain: Toolchain, artifacts: BuildArtifacts) -> None:
        """Run the debugger to completion, then clean up."""
        result = None
        error = None
        try:
            result = self._runner.run(
                toolchain.debug_command(artifacts.executable),
                stop_event=self._stop_requested,
            )
            if result.termination is Termination.STOPPED:
                logger.info(f"{DEBUGGER_EXECUTABLE} stopped")
            elif result.is_error:
                error = (
                    f"Error starting {DEBUGGER_EXECUTABLE}: "
                    f"{result.first_error_line or result.termination.value}"
                )
                logger.error(error)
        finally:
            with self._lock:
                self._session.is_running = False
                self._session.state = SessionState.CLEANING
                self._session.last_result = result
                self._session.last_error = error
            artifacts.remove()
            self._finish()
