"""
Exceptions raised by the generation pipeline.

Semantic non-matches (an attribute that is not the marker, a stub on an
unsupported type) are never exceptions; they only mean that no fragment
is produced. Exceptions are reserved for contract violations and I/O.
"""

from __future__ import annotations


class PrintableFieldsError(Exception):
    """Base class for all printable_fields errors."""

    pass


class SourceParseError(PrintableFieldsError):
    """Raised when C# source cannot be parsed in strict mode.

    This can happen when:
    - An input file contains syntax errors and ``strict_parse`` is enabled
    - Generated output fails validation before being written
    """

    def __init__(self, message: str, path: str = "", line: int | None = None):
        self.path = path
        self.line = line
        super().__init__(message)


class FragmentError(PrintableFieldsError):
    """Raised when a fragment would break the host contract (empty text or duplicate key)."""

    pass


class OutputExistsError(PrintableFieldsError, FileExistsError):
    """Raised when an output file exists and the output mode forbids overwriting it."""

    pass
