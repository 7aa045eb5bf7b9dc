"""
Symbol resolver.

Confirms syntactic candidates against the semantic model. The marker
attribute source is parsed and added to a private copy of the compilation
so that it binds like any user type; a field survives only when one of its
attributes binds to that exact marker symbol.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..marker import MARKER_METADATA_NAME, MARKER_SOURCE, MARKER_SOURCE_PATH
from ..syntax.nodes import declared_name, modifiers, return_type
from ..syntax.parser import CSharpParser
from ..syntax.scanner import Candidate
from .compilation import Compilation
from .symbols import FieldSymbol, SyntaxReference, TypeSymbol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedField:
    """A field confirmed to carry the marker attribute."""

    owning_type: TypeSymbol
    name: str
    has_marker_annotation: bool = True


@dataclass(frozen=True)
class ResolvedStubGroup:
    """A type declaring the PrintAllFields stub, with the fields to print."""

    owning_type: TypeSymbol
    field_names: tuple[str, ...] = ()

    # Copied from the stub so the implementation matches its declaration
    method_name: str = "PrintAllFields"
    method_modifiers: tuple[str, ...] = ("partial",)
    return_type: str = "void"

    stub: SyntaxReference | None = field(default=None, compare=False)


class SymbolResolver:
    """Binds scanner candidates to symbols of a privately augmented compilation."""

    def __init__(self, compilation: Compilation, parser: CSharpParser | None = None):
        """
        Initialize the resolver.

        Args:
            compilation: The caller's compilation; never modified
            parser: Parser used for the marker source
        """
        parser = parser or CSharpParser()
        marker_tree = parser.parse(MARKER_SOURCE, path=MARKER_SOURCE_PATH)
        self.compilation = compilation.add_syntax_trees(marker_tree)
        self.marker_symbol = self.compilation.get_type_by_metadata_name(MARKER_METADATA_NAME)

    def resolve_fields(self, candidates: Iterable[Candidate]) -> list[ResolvedField]:
        """
        Keep the fields whose attributes bind to the marker type.

        Args:
            candidates: Annotated field declarations in scan order

        Returns:
            One ResolvedField per confirmed variable declarator, in scan order
        """
        resolved = []
        for candidate in candidates:
            for field_symbol in self.compilation.get_declared_fields(candidate.syntax_tree, candidate.node):
                if self.has_marker_annotation(field_symbol):
                    resolved.append(ResolvedField(owning_type=field_symbol.containing_type, name=field_symbol.name))
                else:
                    logger.debug(f"{field_symbol!r} has no {MARKER_METADATA_NAME} attribute, skipping")
        return resolved

    def has_marker_annotation(self, field_symbol: FieldSymbol) -> bool:
        if self.marker_symbol is None:
            return False
        return any(attribute.attribute_class is self.marker_symbol for attribute in field_symbol.attributes)

    def resolve_stubs(self, candidates: Iterable[Candidate]) -> list[ResolvedStubGroup]:
        """
        Resolve the owning type of each stub and enumerate its printable fields.

        A type with more than one matching stub yields a single group.

        Args:
            candidates: Stub method declarations in scan order

        Returns:
            One ResolvedStubGroup per owning type, in scan order
        """
        groups: list[ResolvedStubGroup] = []
        seen: set[TypeSymbol] = set()
        for candidate in candidates:
            owning_type = self.compilation.get_containing_type(candidate.syntax_tree, candidate.node)
            if owning_type is None:
                logger.debug(f"{candidate.syntax_tree.path}: stub outside of a type declaration, skipping")
                continue
            if owning_type in seen:
                continue
            seen.add(owning_type)

            tree = candidate.syntax_tree
            groups.append(
                ResolvedStubGroup(
                    owning_type=owning_type,
                    field_names=tuple(f.name for f in printable_fields(owning_type)),
                    method_name=declared_name(candidate.node, tree),
                    method_modifiers=tuple(modifiers(candidate.node, tree)),
                    return_type=return_type(candidate.node, tree),
                    stub=SyntaxReference(tree, candidate.node),
                )
            )
        return groups


def printable_fields(type_symbol: TypeSymbol) -> list[FieldSymbol]:
    """Instance fields declared directly on a type that can be referenced by name."""
    return [f for f in type_symbol.get_members() if f.can_be_referenced_by_name and not f.is_static]
