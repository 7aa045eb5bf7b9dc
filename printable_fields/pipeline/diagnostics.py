"""
Structured diagnostics reported back to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .semantic.symbols import SyntaxReference, TypeSymbol

UNSUPPORTED_NESTED_TYPE = "PF0001"


class DiagnosticSeverity(str, Enum):
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A message about the input, with an optional source location."""

    id: str
    severity: DiagnosticSeverity
    message: str
    path: str = ""
    line: int | None = None
    column: int | None = None

    def __str__(self) -> str:
        location = self.path or "<source>"
        if self.line is not None:
            location += f"({self.line},{self.column})"
        return f"{location}: {self.severity.value} {self.id}: {self.message}"


def unsupported_nested_type(type_symbol: TypeSymbol, origin: str, syntax: SyntaxReference | None = None) -> Diagnostic:
    """PF0001: the owning type must be declared directly in a namespace."""
    if syntax is None and type_symbol.declarations:
        syntax = type_symbol.declarations[0]
    line, column = syntax.location if syntax is not None else (None, None)
    return Diagnostic(
        id=UNSUPPORTED_NESTED_TYPE,
        severity=DiagnosticSeverity.WARNING,
        message=f"'{type_symbol.metadata_name}' is a nested type; {origin} is only generated for top-level types",
        path=syntax.path if syntax is not None else "",
        line=line,
        column=column,
    )
