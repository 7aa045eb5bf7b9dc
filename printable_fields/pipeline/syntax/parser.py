"""
C# parsing on top of tree-sitter and tree-sitter-c-sharp.

The trees produced here are treated as immutable: nothing in the pipeline
edits a node, it only reads types, fields and text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import tree_sitter_c_sharp as ts_csharp
from tree_sitter import Language, Node, Parser

from ..errors import SourceParseError

logger = logging.getLogger(__name__)

CSHARP_LANGUAGE = Language(ts_csharp.language())


@dataclass(eq=False)
class SyntaxTree:
    """A parsed C# source file.

    Attributes:
        path: File path or a synthetic name for in-memory sources
        source: The UTF-8 encoded source text
        tree: The tree-sitter tree
    """

    path: str = ""
    source: bytes = b""
    tree: Any = field(default=None, repr=False)

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        return self.tree.root_node.has_error

    def text(self, node: Node | None) -> str:
        """Get the source text of a node."""
        if node is None:
            return ""
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def node_key(self, node: Node) -> tuple[int, int, int, str]:
        """Stable key identifying a node of this tree."""
        return (id(self), node.start_byte, node.end_byte, node.type)

    def location(self, node: Node) -> tuple[int, int]:
        """Return the 1-based (line, column) of a node."""
        row, column = node.start_point
        return row + 1, column + 1


class CSharpParser:
    """Parses C# source code into SyntaxTree objects."""

    def __init__(self, strict: bool = False):
        """
        Initialize the parser.

        Args:
            strict: Raise SourceParseError when the source has syntax errors
        """
        self.strict = strict
        self._parser = Parser(CSHARP_LANGUAGE)

    def parse(self, code: str, path: str = "") -> SyntaxTree:
        """Parse C# source code.

        Args:
            code: C# source code string
            path: File path used in diagnostics and error messages

        Returns:
            The parsed SyntaxTree

        Raises:
            SourceParseError: In strict mode, if the code has syntax errors
        """
        source = bytes(code, "utf8")
        syntax_tree = SyntaxTree(path=path, source=source, tree=self._parser.parse(source))

        if syntax_tree.has_errors:
            errors = find_errors(syntax_tree.root_node)
            line = errors[0].start_point[0] + 1 if errors else None
            if self.strict:
                snippet = syntax_tree.text(errors[0])[:50] if errors else ""
                raise SourceParseError(
                    f"Failed to parse C# code in {path or '<source>'} at line {line}: syntax error near '{snippet}'",
                    path=path,
                    line=line,
                )
            logger.warning(f"{path or '<source>'}: syntax errors near line {line}, continuing with a partial tree")

        return syntax_tree


def find_errors(node: Node) -> list[Node]:
    """Find all ERROR and missing nodes below a node, in source order."""
    errors = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            errors.append(current)
        stack.extend(reversed(current.children))
    return errors
