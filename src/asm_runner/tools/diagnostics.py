"""Diagnostic tools: asm_diagnostics, asm_template."""

from __future__ import annotations

from asm_runner.session.orchestrator import SessionOrchestrator
from asm_runner.templates import get_template


def register_tools(mcp, orchestrator: SessionOrchestrator) -> None:
    """Register diagnostic tools with the MCP server."""

    @mcp.tool()
    def asm_diagnostics(file: str | None = None, context: int = 2) -> dict:
        """List errors from the last build, with the surrounding source lines.

        Args:
            file: Only return diagnostics for this source file.
            context: Number of source lines to show either side of the error.
        """
        diagnostics = orchestrator.diagnostics
        found = diagnostics.get(file) if file else diagnostics.all()

        items = []
        for diagnostic in found:
            item = diagnostic.to_dict()
            source = diagnostic.source_context(context=context)
            if source:
                item["source"] = source
            items.append(item)

        return {"diagnostics": items, "count": len(items)}

    @mcp.tool()
    def asm_template(name: str = "bits 32") -> dict:
        """Return a starter program skeleton.

        Args:
            name: Template name. Only "bits 32" is available.
        """
        try:
            return {"name": name, "text": get_template(name)}
        except ValueError as e:
            return {"error": str(e)}
