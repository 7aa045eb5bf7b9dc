"""
Emitter module.

Renders fragments from Jinja2 templates shipped in ``templates/``.
"""

from __future__ import annotations

from .emitter import (
    GENERATION_COMMENT,
    CodeEmitter,
    Emission,
    render_print_all_fields,
    render_printables,
    type_declaration,
)

__all__ = [
    "CodeEmitter",
    "Emission",
    "GENERATION_COMMENT",
    "render_printables",
    "render_print_all_fields",
    "type_declaration",
]
