"""Assemble then link a single source file."""

from __future__ import annotations

import logging

from asm_runner.build.artifacts import BuildArtifacts
from asm_runner.build.diagnostics import Diagnostic, DiagnosticSet, parse_diagnostic
from asm_runner.errors import BuildError
from asm_runner.process.runner import ProcessRunner
from asm_runner.toolchain import Toolchain

logger = logging.getLogger(__name__)


class BuildPipeline:
    """nasm -> ALINK, each step gated on the previous one succeeding.

    Partial artifacts from a failed build are left on disk.
    """

    def __init__(
        self,
        toolchain: Toolchain,
        runner: ProcessRunner,
        diagnostics: DiagnosticSet,
        timeout: float | None = None,
    ) -> None:
        self._toolchain = toolchain
        self._runner = runner
        self._diagnostics = diagnostics
        self._timeout = timeout

    def build(
        self,
        source_file: str,
        console_subsystem: bool = True,
    ) -> BuildArtifacts:
        """Assemble and link source_file.

        Returns the artifacts on success.

        Raises:
            BuildError: If either tool fails. An assembler failure with a
                recognizable line number also registers a Diagnostic.
        """
        artifacts = BuildArtifacts.from_source(source_file)
        self._diagnostics.clear()

        self.assemble(artifacts)
        self.link(artifacts, console_subsystem=console_subsystem)

        logger.info(f"Built {artifacts.executable}")
        return artifacts

    def assemble(self, artifacts: BuildArtifacts) -> None:
        result = self._runner.run(
            self._toolchain.assemble_command(artifacts.source, artifacts.listing),
            timeout=self._timeout,
        )
        if not result.is_error:
            return

        # nasm usually prints one "file:line: error: ..." line, which lands
        # on the second line once headed by the command; output that
        # already carries a leading line is read as is
        located = parse_diagnostic(result.failure_text) or parse_diagnostic(
            result.error_text
        )
        if located is None:
            logger.info("Line number not found in the error message.")
            raise BuildError(
                stage="assemble",
                message=f"Assembly failed: {result.first_error_line or result.termination.value}",
                result=result.to_dict(),
            )

        line, message = located
        diagnostic = Diagnostic(file=artifacts.source, line=line, message=message)
        self._diagnostics.set(artifacts.source, [diagnostic])
        logger.warning(f"Assembly failed at line {line}: {message}")
        raise BuildError(
            stage="assemble",
            message=f"Error: {message}",
            diagnostic=diagnostic.to_dict(),
            result=result.to_dict(),
        )

    def link(self, artifacts: BuildArtifacts, console_subsystem: bool = True) -> None:
        result = self._runner.run(
            self._toolchain.link_command(artifacts.obj, console_subsystem),
            timeout=self._timeout,
        )
        if result.is_error:
            logger.warning(f"Link failed: {result.first_error_line}")
            raise BuildError(
                stage="link",
                message=f"Link failed: {result.first_error_line or result.termination.value}",
                result=result.to_dict(),
            )
