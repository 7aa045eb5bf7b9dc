"""
Syntax layer: tree-sitter parsing and candidate scanning.
"""

from __future__ import annotations

from .parser import CSharpParser, SyntaxTree
from .scanner import Candidate, CandidateKind, SyntaxScanner

__all__ = [
    "CSharpParser",
    "SyntaxTree",
    "Candidate",
    "CandidateKind",
    "SyntaxScanner",
]
