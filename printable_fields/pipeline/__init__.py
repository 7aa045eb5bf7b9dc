"""
Pipeline - printable fields source generation for C#.

One generation pass runs these phases, strictly in order:

1. Phase 1 (Scanner): Collect syntactic candidates from tree-sitter trees
2. Phase 2 (Resolver): Bind candidates to symbols of a private compilation
   that also contains the marker attribute
3. Phase 3 (Grouper): Partition marked fields by owning type
4. Phase 4 (Emitter): Render fragments from Jinja2 templates
5. Phase 5 (Sink): Register fragments under unique keys
6. Phase 6 (Writer): Optional atomic write of the fragments to disk
"""

from __future__ import annotations

from .config import GeneratorConfig, OutputConfig, OutputMode
from .diagnostics import Diagnostic, DiagnosticSeverity
from .emitter import CodeEmitter, Emission
from .errors import FragmentError, OutputExistsError, PrintableFieldsError, SourceParseError
from .generator import GenerationResult, PrintableFieldsGenerator, generate_sources
from .semantic import Compilation, SymbolResolver
from .syntax import CSharpParser, SyntaxScanner, SyntaxTree
from .writer import AtomicWriter, write_fragments

__all__ = [
    "PrintableFieldsGenerator",
    "GenerationResult",
    "generate_sources",
    "GeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "Diagnostic",
    "DiagnosticSeverity",
    "CodeEmitter",
    "Emission",
    "Compilation",
    "SymbolResolver",
    "CSharpParser",
    "SyntaxScanner",
    "SyntaxTree",
    "AtomicWriter",
    "write_fragments",
    "PrintableFieldsError",
    "SourceParseError",
    "FragmentError",
    "OutputExistsError",
]
