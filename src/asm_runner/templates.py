"""Starter source for a 32-bit nasm/ALINK program."""

from __future__ import annotations

BITS32_TEMPLATE = """\
bits 32
section .data

section .bss

section .text
\tglobal _start

_start:
\t; Your code here
"""

TEMPLATES: dict[str, str] = {
    "bits 32": BITS32_TEMPLATE,
}


def get_template(name: str) -> str:
    """Look up a template by name.

    Raises ValueError if the template doesn't exist.
    """
    template = TEMPLATES.get(name)
    if template is None:
        available = ", ".join(sorted(TEMPLATES))
        raise ValueError(f"Unknown template '{name}'. Available: {available}")
    return template
