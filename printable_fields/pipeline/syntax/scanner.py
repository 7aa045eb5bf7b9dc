"""
Syntax scanner.

Collects candidate declarations using syntactic shape only. Candidates are
confirmed (or dropped) later by the symbol resolver, so false positives are
expected here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node

from .nodes import declared_name, modifiers, parameter_count
from .parser import SyntaxTree


class CandidateKind(Enum):
    """Kind of syntactic candidate."""

    ANNOTATED_FIELD = "annotated_field"  # field_declaration with an attribute list
    METHOD_STUB = "method_stub"  # partial, parameterless PrintAllFields()


@dataclass(frozen=True)
class Candidate:
    """A syntax node matching one of the two patterns of interest."""

    kind: CandidateKind
    syntax_tree: SyntaxTree
    node: Node = field(compare=False)


class SyntaxScanner:
    """Depth-first scanner collecting field and stub candidates in source order.

    A new scanner is created for every generation pass; it keeps no state
    beyond its two candidate lists.
    """

    def __init__(self, stub_method_name: str = "PrintAllFields"):
        self.stub_method_name = stub_method_name
        self.candidate_fields: list[Candidate] = []
        self.candidate_methods: list[Candidate] = []

    def scan(self, syntax_trees: Iterable[SyntaxTree]) -> SyntaxScanner:
        """Visit every node of every tree exactly once."""
        for syntax_tree in syntax_trees:
            stack = [syntax_tree.root_node]
            while stack:
                node = stack.pop()
                self.visit(syntax_tree, node)
                stack.extend(reversed(node.children))
        return self

    def visit(self, syntax_tree: SyntaxTree, node: Node) -> None:
        match node.type:
            case "field_declaration":
                if any(child.type == "attribute_list" for child in node.children):
                    self.candidate_fields.append(Candidate(CandidateKind.ANNOTATED_FIELD, syntax_tree, node))
            case "method_declaration":
                if self._is_stub(syntax_tree, node):
                    self.candidate_methods.append(Candidate(CandidateKind.METHOD_STUB, syntax_tree, node))
            case _:
                pass

    def _is_stub(self, syntax_tree: SyntaxTree, node: Node) -> bool:
        return (
            "partial" in modifiers(node, syntax_tree)
            and declared_name(node, syntax_tree) == self.stub_method_name
            and parameter_count(node) == 0
        )
