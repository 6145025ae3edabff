"""Session tools: asm_debug, asm_run, asm_stop, asm_status, asm_toolchain."""

from __future__ import annotations

from asm_runner.errors import AsmRunnerError
from asm_runner.session.orchestrator import SessionOrchestrator


def register_tools(mcp, orchestrator: SessionOrchestrator) -> None:
    """Register session tools with the MCP server."""

    @mcp.tool()
    def asm_debug(source_file: str, toolchain_root: str | None = None) -> dict:
        """Assemble and link a source file, then open it in OllyDbg.

        Any previous debugger and target are stopped first. The build
        artifacts (.lst, .obj, .exe) are deleted once the debugger closes.
        Returns as soon as the debugger has started; use asm_status to follow
        it and asm_stop to end it.

        Args:
            source_file: Path to the .asm file.
            toolchain_root: Folder containing nasm/ and ollydbg/. Defaults to
                the configured ASM_RUNNER_TOOLCHAIN_ROOT.
        """
        try:
            session = orchestrator.debug(source_file, toolchain_root, wait=False)
            return {"status": "debugging", **session.to_dict()}
        except AsmRunnerError as e:
            return e.to_dict()

    @mcp.tool()
    def asm_run(source_file: str, toolchain_root: str | None = None) -> dict:
        """Assemble and link a source file, then run it in a new terminal.

        The build artifacts are kept so the program can be stopped or
        relaunched later.

        Args:
            source_file: Path to the .asm file.
            toolchain_root: Folder containing nasm/ and ollydbg/. Defaults to
                the configured ASM_RUNNER_TOOLCHAIN_ROOT.
        """
        try:
            session = orchestrator.run(source_file, toolchain_root)
            return {"status": "started", **session.to_dict()}
        except AsmRunnerError as e:
            return e.to_dict()

    @mcp.tool()
    def asm_stop() -> dict:
        """Stop the debugger and the last started program."""
        session = orchestrator.stop()
        return {"status": "stopped", **session.to_dict()}

    @mcp.tool()
    def asm_status() -> dict:
        """Get the current session state and whether a debug session is active."""
        return orchestrator.session.to_dict()

    @mcp.tool()
    def asm_toolchain(toolchain_root: str | None = None) -> dict:
        """Show where the assembler, linker and debugger are expected.

        Args:
            toolchain_root: Folder to check. Defaults to the configured root.
        """
        try:
            toolchain = orchestrator.toolchain(toolchain_root)
        except AsmRunnerError as e:
            return e.to_dict()
        missing = toolchain.missing_tools()
        return {**toolchain.to_dict(), "complete": not missing, "missing": missing}
