"""Assembler diagnostics: locating error lines and tracking them per file."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from pathlib import Path

# nasm reports "<file>:<line>: error: <text>"
_LINE_PATTERN = re.compile(r":(\d+):")


def parse_diagnostic(error_text: str | None) -> tuple[int, str] | None:
    """Find the source line in a failed assembly's error text.

    Only the second line is examined. Callers head the tool output with a
    "Command failed: <command>" line, so this is the first line nasm printed.
    Returns (line_number, that_line) or None.

    Best-effort and tied to nasm's output format.
    """
    if not error_text:
        return None
    lines = error_text.split("\n")
    if len(lines) < 2:
        return None

    message = lines[1].rstrip("\r")
    match = _LINE_PATTERN.search(message)
    if match is None:
        return None
    return int(match.group(1)), message


@dataclass(frozen=True)
class Diagnostic:
    """An error at a 1-based line of a source file."""

    file: str
    line: int
    message: str
    severity: str = "error"

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "message": self.message,
            "severity": self.severity,
        }

    def source_context(self, context: int = 2) -> list[dict] | None:
        """Source lines around the error, the offending one carrying the message.

        None when the file can't be read or the line is past its end.
        """
        try:
            lines = Path(self.file).read_text(errors="replace").splitlines()
        except OSError:
            return None
        if not 1 <= self.line <= len(lines):
            return None

        first = max(1, self.line - context)
        last = min(len(lines), self.line + context)
        window = []
        for number in range(first, last + 1):
            entry: dict = {"line": number, "text": lines[number - 1]}
            if number == self.line:
                entry["message"] = self.message
            window.append(entry)
        return window


class DiagnosticSet:
    """Thread-safe collection of diagnostics keyed by file."""

    def __init__(self) -> None:
        self._by_file: dict[str, list[Diagnostic]] = {}
        self._lock = threading.Lock()

    def set(self, file: str, diagnostics: list[Diagnostic]) -> None:
        """Replace all diagnostics for file."""
        with self._lock:
            if diagnostics:
                self._by_file[file] = list(diagnostics)
            else:
                self._by_file.pop(file, None)

    def get(self, file: str) -> list[Diagnostic]:
        with self._lock:
            return list(self._by_file.get(file, []))

    def all(self) -> list[Diagnostic]:
        with self._lock:
            return [d for diags in self._by_file.values() for d in diags]

    def clear(self) -> None:
        with self._lock:
            self._by_file.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(diags) for diags in self._by_file.values())
