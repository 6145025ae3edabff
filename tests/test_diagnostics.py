"""Tests for diagnostic parsing and the per-file diagnostic set."""

import pytest

from asm_runner.build.diagnostics import Diagnostic, DiagnosticSet, parse_diagnostic


class TestParseDiagnostic:
    def test_second_line_with_line_number(self):
        assert parse_diagnostic("line1\nfile.asm:17: error message") == (
            17,
            "file.asm:17: error message",
        )

    def test_single_line_not_found(self):
        assert parse_diagnostic("file.asm:17: error message") is None

    def test_empty_and_none(self):
        assert parse_diagnostic("") is None
        assert parse_diagnostic(None) is None

    def test_no_match_on_second_line(self):
        assert parse_diagnostic("header\nsomething went wrong") is None

    def test_only_second_line_examined(self):
        text = "a.asm:1: first\nno number here\na.asm:9: third"
        assert parse_diagnostic(text) is None

    def test_windows_line_endings(self):
        line, message = parse_diagnostic("warning\r\nbad.asm:5: undefined symbol FOO\r\n")
        assert line == 5
        assert message == "bad.asm:5: undefined symbol FOO"

    def test_drive_letter_path(self):
        text = "Command failed\nC:\\work\\bad.asm:42: error: parser: instruction expected"
        line, message = parse_diagnostic(text)
        assert line == 42
        assert message.startswith("C:\\work\\bad.asm:42:")


class TestDiagnostic:
    def test_defaults_to_error(self):
        d = Diagnostic(file="a.asm", line=3, message="boom")
        assert d.severity == "error"

    def test_to_dict(self):
        d = Diagnostic(file="a.asm", line=3, message="boom")
        assert d.to_dict() == {
            "file": "a.asm",
            "line": 3,
            "message": "boom",
            "severity": "error",
        }

    def test_frozen(self):
        d = Diagnostic(file="a.asm", line=3, message="boom")
        with pytest.raises(AttributeError):
            d.line = 4


class TestDiagnosticSet:
    def test_empty(self):
        s = DiagnosticSet()
        assert len(s) == 0
        assert s.all() == []
        assert s.get("a.asm") == []

    def test_set_replaces_for_file(self):
        s = DiagnosticSet()
        s.set("a.asm", [Diagnostic("a.asm", 1, "x"), Diagnostic("a.asm", 2, "y")])
        s.set("a.asm", [Diagnostic("a.asm", 7, "z")])

        assert [d.line for d in s.get("a.asm")] == [7]
        assert len(s) == 1

    def test_files_are_independent(self):
        s = DiagnosticSet()
        s.set("a.asm", [Diagnostic("a.asm", 1, "x")])
        s.set("b.asm", [Diagnostic("b.asm", 2, "y")])
        s.set("a.asm", [])

        assert s.get("a.asm") == []
        assert [d.file for d in s.all()] == ["b.asm"]

    def test_clear(self):
        s = DiagnosticSet()
        s.set("a.asm", [Diagnostic("a.asm", 1, "x")])
        s.clear()
        assert len(s) == 0

    def test_get_returns_copy(self):
        s = DiagnosticSet()
        s.set("a.asm", [Diagnostic("a.asm", 1, "x")])
        s.get("a.asm").clear()
        assert len(s.get("a.asm")) == 1


_PROGRAM = """\
bits 32
section .text
\tglobal start

start:
\tmov eax, 1
\tret
"""


@pytest.fixture
def program(tmp_path):
    path = tmp_path / "prog.asm"
    path.write_text(_PROGRAM)
    return str(path)


class TestDiagnosticSourceContext:
    def test_window_around_error(self, program):
        d = Diagnostic(file=program, line=4, message="prog.asm:4: error: boom")
        window = d.source_context(context=2)

        assert [entry["line"] for entry in window] == [2, 3, 4, 5, 6]
        assert window[3]["text"] == "start:"

    def test_message_only_on_offending_line(self, program):
        d = Diagnostic(file=program, line=6, message="prog.asm:6: error: bad operand")
        window = d.source_context(context=1)

        flagged = [entry for entry in window if "message" in entry]
        assert flagged == [{"line": 6, "text": "\tmov eax, 1", "message": "prog.asm:6: error: bad operand"}]

    def test_clamped_to_file_bounds(self, program):
        first = Diagnostic(file=program, line=1, message="x").source_context(context=3)
        last = Diagnostic(file=program, line=7, message="x").source_context(context=3)

        assert first[0] == {"line": 1, "text": "bits 32", "message": "x"}
        assert last[-1]["line"] == 7
        assert "message" in last[-1]

    def test_zero_context(self, program):
        window = Diagnostic(file=program, line=7, message="x").source_context(context=0)
        assert window == [{"line": 7, "text": "\tret", "message": "x"}]

    def test_windows_line_endings(self, tmp_path):
        path = tmp_path / "crlf.asm"
        path.write_bytes(b"bits 32\r\nstart:\r\n\tret\r\n")
        window = Diagnostic(file=str(path), line=2, message="x").source_context(context=1)
        assert [entry["text"] for entry in window] == ["bits 32", "start:", "\tret"]

    def test_missing_file(self, tmp_path):
        d = Diagnostic(file=str(tmp_path / "gone.asm"), line=1, message="x")
        assert d.source_context() is None

    def test_line_past_end_of_file(self, program):
        assert Diagnostic(file=program, line=40, message="x").source_context() is None
