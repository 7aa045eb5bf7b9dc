"""
Semantic layer: compilation, symbols, name binding and candidate resolution.
"""

from __future__ import annotations

from .compilation import Compilation
from .resolver import ResolvedField, ResolvedStubGroup, SymbolResolver, printable_fields
from .symbols import AttributeData, FieldSymbol, NamespaceSymbol, TypeKind, TypeSymbol

__all__ = [
    "Compilation",
    "SymbolResolver",
    "ResolvedField",
    "ResolvedStubGroup",
    "printable_fields",
    "AttributeData",
    "FieldSymbol",
    "NamespaceSymbol",
    "TypeKind",
    "TypeSymbol",
]
