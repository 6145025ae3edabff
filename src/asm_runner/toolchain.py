"""Toolchain layout: where nasm, ALINK and OllyDbg live and how they're called."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from asm_runner.errors import ConfigurationError

ASSEMBLER_EXECUTABLE = "nasm.exe"
LINKER_EXECUTABLE = "ALINK.EXE"
DEBUGGER_EXECUTABLE = "ollydbg.exe"

# Sub-directories of the toolchain root
_NASM_DIR = "nasm"
_OLLYDBG_DIR = "ollydbg"


@dataclass(frozen=True)
class Toolchain:
    """Paths and command lines for one toolchain root."""

    root: str
    entry_point: str = "start"

    @property
    def assembler_path(self) -> str:
        return os.path.join(self.root, _NASM_DIR, ASSEMBLER_EXECUTABLE)

    @property
    def linker_path(self) -> str:
        return os.path.join(self.root, _NASM_DIR, LINKER_EXECUTABLE)

    @property
    def debugger_path(self) -> str:
        return os.path.join(self.root, _OLLYDBG_DIR, DEBUGGER_EXECUTABLE)

    @property
    def include_dir(self) -> str:
        # nasm concatenates -I prefixes verbatim, so keep the trailing separator
        return os.path.join(self.root, _NASM_DIR, "")

    def assemble_command(self, source: str, listing: str) -> list[str]:
        return [
            self.assembler_path,
            "-fobj", source,
            "-l", listing,
            f"-I{self.include_dir}",
        ]

    def link_command(self, obj: str, console_subsystem: bool = True) -> list[str]:
        cmd = [self.linker_path, "-oPE"]
        if console_subsystem:
            cmd += ["-subsys", "console"]
        cmd += ["-entry", self.entry_point, obj]
        return cmd

    def debug_command(self, executable: str) -> list[str]:
        return [self.debugger_path, executable]

    def missing_tools(self) -> list[str]:
        """Executables that aren't present under the root."""
        return [
            path
            for path in (self.assembler_path, self.linker_path, self.debugger_path)
            if not os.path.isfile(path)
        ]

    def to_dict(self) -> dict:
        return {
            "root": self.root,
            "assembler": self.assembler_path,
            "linker": self.linker_path,
            "debugger": self.debugger_path,
            "include_dir": self.include_dir,
            "entry_point": self.entry_point,
        }


def resolve_toolchain(
    root: str | Path | None,
    entry_point: str = "start",
) -> Toolchain:
    """Build a Toolchain for a configured root directory.

    Raises ConfigurationError if the root is unset or isn't a directory.
    """
    if root is None or str(root).strip() == "":
        raise ConfigurationError("No toolchain path set", missing="toolchain_root")
    root = str(root)
    if not os.path.isdir(root):
        raise ConfigurationError(
            f"Toolchain path '{root}' is not a directory", missing="toolchain_root"
        )
    return Toolchain(root=root, entry_point=entry_point)
