"""
Semantic symbol definitions.

Symbols compare by identity: a compilation creates exactly one symbol per
namespace, type and field, and every partial declaration of a type maps to
the same TypeSymbol. Grouping by symbol is therefore grouping by nominal
identity, never by name string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node

from ..syntax.parser import SyntaxTree


class TypeKind(str, Enum):
    """Kind of a named type, valued by its declaration keyword."""

    CLASS = "class"
    STRUCT = "struct"
    RECORD = "record"
    RECORD_STRUCT = "record struct"
    INTERFACE = "interface"
    ENUM = "enum"


@dataclass(frozen=True)
class SyntaxReference:
    """Points at the node that declares a symbol."""

    syntax_tree: SyntaxTree
    node: Node = field(compare=False)

    @property
    def path(self) -> str:
        return self.syntax_tree.path

    @property
    def location(self) -> tuple[int, int]:
        return self.syntax_tree.location(self.node)


@dataclass(eq=False)
class NamespaceSymbol:
    """A namespace; the root is the unnamed global namespace."""

    name: str = ""
    containing_namespace: NamespaceSymbol | None = None
    namespaces: dict[str, NamespaceSymbol] = field(default_factory=dict)
    types: dict[tuple[str, int], TypeSymbol] = field(default_factory=dict)

    @property
    def is_global(self) -> bool:
        return self.containing_namespace is None

    def get_namespace(self, name: str) -> NamespaceSymbol:
        """Get or create a child namespace."""
        if name not in self.namespaces:
            self.namespaces[name] = NamespaceSymbol(name=name, containing_namespace=self)
        return self.namespaces[name]

    def display_string(self) -> str:
        """Dotted name, empty for the global namespace."""
        if self.is_global:
            return ""
        parent = self.containing_namespace.display_string()
        return f"{parent}.{self.name}" if parent else self.name

    def __repr__(self) -> str:
        return f"NamespaceSymbol({self.display_string() or '<global>'!r})"


@dataclass(eq=False)
class AttributeData:
    """An attribute applied to a field, with its bound attribute class (None when unresolved)."""

    attribute_class: TypeSymbol | None = None
    syntax: SyntaxReference | None = None


@dataclass(eq=False)
class FieldSymbol:
    """A field, including compiler-synthesized auto-property backing fields."""

    name: str = ""
    containing_type: TypeSymbol | None = None
    is_static: bool = False
    is_const: bool = False

    # False for synthesized storage such as <Name>k__BackingField
    can_be_referenced_by_name: bool = True

    attributes: list[AttributeData] = field(default_factory=list)
    declaration: SyntaxReference | None = None

    def __repr__(self) -> str:
        owner = self.containing_type.name if self.containing_type else "?"
        return f"FieldSymbol({owner}.{self.name})"


@dataclass(eq=False)
class TypeSymbol:
    """A named type, merged across all of its partial declarations."""

    name: str = ""
    arity: int = 0
    kind: TypeKind = TypeKind.CLASS
    containing_symbol: NamespaceSymbol | TypeSymbol | None = None
    type_parameters: list[str] = field(default_factory=list)

    # Declarations in compilation order (several for partial types)
    declarations: list[SyntaxReference] = field(default_factory=list)

    # Direct members in declaration order
    fields: list[FieldSymbol] = field(default_factory=list)
    nested_types: dict[tuple[str, int], TypeSymbol] = field(default_factory=dict)

    # Base class from the first base list entry; an entry that does not bind
    # to a source type is external (e.g. System.Attribute)
    base_type: TypeSymbol | None = None
    has_external_base: bool = False

    @property
    def is_attribute_class(self) -> bool:
        """True for classes whose base chain reaches an external base such as System.Attribute."""
        seen: set[int] = set()
        symbol: TypeSymbol | None = self
        while symbol is not None and id(symbol) not in seen:
            seen.add(id(symbol))
            if symbol.kind != TypeKind.CLASS:
                return False
            if symbol.has_external_base:
                return True
            symbol = symbol.base_type
        return False

    @property
    def containing_type(self) -> TypeSymbol | None:
        return self.containing_symbol if isinstance(self.containing_symbol, TypeSymbol) else None

    @property
    def containing_namespace(self) -> NamespaceSymbol:
        symbol = self.containing_symbol
        while isinstance(symbol, TypeSymbol):
            symbol = symbol.containing_symbol
        return symbol

    @property
    def is_top_level(self) -> bool:
        """True when the lexical parent is a namespace rather than another type."""
        return isinstance(self.containing_symbol, NamespaceSymbol)

    @property
    def metadata_name(self) -> str:
        """CLR-style name, e.g. ``Geometry.Outer+Inner`` or ``Boxes.Box`1``."""
        own = f"{self.name}`{self.arity}" if self.arity else self.name
        if self.containing_type is not None:
            return f"{self.containing_type.metadata_name}+{own}"
        namespace = self.containing_namespace.display_string()
        return f"{namespace}.{own}" if namespace else own

    def get_members(self) -> list[FieldSymbol]:
        """Direct field members; inherited members are never included."""
        return list(self.fields)

    def __repr__(self) -> str:
        return f"TypeSymbol({self.metadata_name!r})"
