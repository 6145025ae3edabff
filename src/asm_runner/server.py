"""asm-runner MCP server: build, run and debug nasm programs with OllyDbg."""

from __future__ import annotations

import atexit
import logging

from mcp.server.fastmcp import FastMCP

from asm_runner.config import settings
from asm_runner.session.orchestrator import SessionOrchestrator
from asm_runner.tools import diagnostics as diagnostic_tools
from asm_runner.tools import session as session_tools

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

mcp = FastMCP("asm-runner")

# Shared orchestrator: module-level singleton
_orchestrator = SessionOrchestrator(settings)
atexit.register(_orchestrator.shutdown)

# Register tool modules
session_tools.register_tools(mcp, _orchestrator)
diagnostic_tools.register_tools(mcp, _orchestrator)


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
