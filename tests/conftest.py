"""Shared fixtures: a fake toolchain runner and a temporary project."""

import os
from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from asm_runner.config import Settings
from asm_runner.process.terminal import TerminalLauncher
from asm_runner.process.terminator import ProcessTerminator
from asm_runner.process.types import Termination, ToolResult
from asm_runner.session.orchestrator import SessionOrchestrator


def _touch(path):
    with open(path, "w") as f:
        f.write("")


class FakeRunner:
    """Stands in for ProcessRunner.

    By default nasm writes the .lst/.obj, ALINK writes the .exe and every
    other command succeeds. Per-tool handlers (keyed by executable file name)
    can return a ToolResult or a callable(cmd, stop_event) -> ToolResult.
    """

    def __init__(self, handlers=None):
        self.calls = []
        self.handlers = dict(handlers or {})

    def run(self, command, timeout=None, stop_event=None):
        cmd = tuple(command)
        self.calls.append(cmd)
        name = os.path.basename(cmd[0])

        handler = self.handlers.get(name)
        if callable(handler):
            result = handler(cmd, stop_event)
        elif handler is not None:
            result = replace(handler, command=cmd)
        else:
            result = self._default(name, cmd)

        if stop_event is not None and stop_event.is_set() and result.termination is Termination.EXITED:
            result = replace(result, termination=Termination.STOPPED)
        return result

    def _default(self, name, cmd):
        if name == "nasm.exe":
            listing = cmd[cmd.index("-l") + 1]
            _touch(listing)
            _touch(listing[:-3] + "obj")
        elif name == "ALINK.EXE":
            _touch(cmd[-1][:-3] + "exe")
        return ToolResult(command=cmd, exit_code=0)

    def names(self):
        return [os.path.basename(c[0]) for c in self.calls]


@pytest.fixture
def toolchain_root(tmp_path):
    root = tmp_path / "asm_tools"
    (root / "nasm").mkdir(parents=True)
    (root / "ollydbg").mkdir()
    return root


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "hello.asm"
    path.write_text("bits 32\nsection .text\nstart:\n\tundefined_op\n\tret\n")
    return str(path)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def terminator():
    return MagicMock(spec=ProcessTerminator)


@pytest.fixture
def launcher():
    return MagicMock(spec=TerminalLauncher)


@pytest.fixture
def settings(toolchain_root):
    return Settings(_env_file=None, toolchain_root=toolchain_root)


@pytest.fixture
def orchestrator(settings, fake_runner, terminator, launcher):
    return SessionOrchestrator(
        settings=settings,
        runner=fake_runner,
        terminator=terminator,
        launcher=launcher,
    )
