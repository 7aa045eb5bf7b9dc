"""Printable Fields Source Generator

Generates C# print methods for fields marked with [Printable] and bodies
for PrintAllFields() partial method stubs.
"""

__version__ = "0.3.0"

from .pipeline import (
    AtomicWriter,
    Compilation,
    CSharpParser,
    Diagnostic,
    GenerationResult,
    GeneratorConfig,
    OutputConfig,
    OutputMode,
    PrintableFieldsError,
    PrintableFieldsGenerator,
    generate_sources,
    write_fragments,
)

__all__ = [
    "PrintableFieldsGenerator",
    "GenerationResult",
    "generate_sources",
    "Compilation",
    "CSharpParser",
    "Diagnostic",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "PrintableFieldsError",
    "AtomicWriter",
    "write_fragments",
]
