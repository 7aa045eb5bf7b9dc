"""
Compilation: the semantic view over a set of syntax trees.

A Compilation is immutable from the outside. ``add_syntax_trees`` returns a
new compilation sharing the same trees, so a generation pass can augment
its private copy without touching the one the caller holds. Symbols are
built lazily on the first query, in two phases:

1. Declaration: namespaces, types (partial declarations merged), fields and
   the backing fields of auto-properties and field-like events, in tree
   order then source order
2. Binding: base classes are bound first, then attribute names on fields are
   bound to attribute classes
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tree_sitter import Node

from ..syntax.nodes import (
    TRANSPARENT_NODES,
    TYPE_DECLARATIONS,
    base_class_name,
    children_of_type,
    declaration_body,
    declared_name,
    first_child_of_type,
    modifiers,
    name_parts,
    type_keyword,
    type_parameters,
)
from ..syntax.parser import SyntaxTree
from .binder import Binder, ImportScope, UsingDirective
from .symbols import AttributeData, FieldSymbol, NamespaceSymbol, SyntaxReference, TypeKind, TypeSymbol

logger = logging.getLogger(__name__)

NodeKey = tuple[int, int, int, str]


class Compilation:
    """An immutable set of syntax trees with lazily built symbols."""

    def __init__(self, syntax_trees: Iterable[SyntaxTree] = ()):
        self._syntax_trees = tuple(syntax_trees)
        self._declared = False
        self._global_namespace = NamespaceSymbol()
        self._global_usings: list[UsingDirective] = []
        self._types_by_node: dict[NodeKey, TypeSymbol] = {}
        self._fields_by_node: dict[NodeKey, list[FieldSymbol]] = {}
        self._pending_attributes: list[tuple[AttributeData, Node, ImportScope, TypeSymbol]] = []
        self._pending_bases: list[tuple[TypeSymbol, SyntaxReference, ImportScope]] = []

    @property
    def syntax_trees(self) -> tuple[SyntaxTree, ...]:
        return self._syntax_trees

    def add_syntax_trees(self, *syntax_trees: SyntaxTree) -> Compilation:
        """Return a new compilation with extra trees; this one is left untouched."""
        return Compilation(self._syntax_trees + tuple(syntax_trees))

    @property
    def global_namespace(self) -> NamespaceSymbol:
        self._ensure_declared()
        return self._global_namespace

    def get_type_by_metadata_name(self, metadata_name: str) -> TypeSymbol | None:
        """
        Find a type by its CLR metadata name.

        Args:
            metadata_name: e.g. ``PrintableFields.PrintableAttribute``,
                ``Geometry.Outer+Inner`` or ``Boxes.Box`1``

        Returns:
            The type symbol, or None if no such type is declared
        """
        self._ensure_declared()
        outer, *nested = metadata_name.split("+")
        *namespace_parts, type_name = outer.split(".")

        namespace = self._global_namespace
        for part in namespace_parts:
            namespace = namespace.namespaces.get(part)
            if namespace is None:
                return None

        symbol = namespace.types.get(_split_arity(type_name))
        for part in nested:
            if symbol is None:
                return None
            symbol = symbol.nested_types.get(_split_arity(part))
        return symbol

    def get_declared_fields(self, syntax_tree: SyntaxTree, node: Node) -> list[FieldSymbol]:
        """Get the fields declared by a field_declaration node, one per declarator."""
        self._ensure_declared()
        return list(self._fields_by_node.get(syntax_tree.node_key(node), []))

    def get_containing_type(self, syntax_tree: SyntaxTree, node: Node) -> TypeSymbol | None:
        """Get the type whose body contains a member declaration node."""
        self._ensure_declared()
        parent = node.parent
        while parent is not None:
            if parent.type in TYPE_DECLARATIONS:
                return self._types_by_node.get(syntax_tree.node_key(parent))
            parent = parent.parent
        return None

    def get_all_types(self) -> list[TypeSymbol]:
        """All declared types, nested ones included, in declaration order."""
        self._ensure_declared()
        result: list[TypeSymbol] = []
        for symbol in self._types_by_node.values():
            if symbol not in result:
                result.append(symbol)
        return result

    def _ensure_declared(self) -> None:
        if self._declared:
            return
        self._declared = True

        for syntax_tree in self._syntax_trees:
            scope = ImportScope(namespace=self._global_namespace, is_compilation_unit=True)
            self._declare_members(syntax_tree, syntax_tree.root_node.children, scope, None)

        binder = Binder(self._global_namespace, self._global_usings)
        for type_symbol, base, scope in self._pending_bases:
            base_type = binder.bind_type(base.syntax_tree, base.node, scope, type_symbol.containing_type)
            if base_type is None:
                type_symbol.has_external_base = True
            else:
                type_symbol.base_type = base_type
        self._pending_bases = []

        for attribute, name_node, scope, containing_type in self._pending_attributes:
            attribute.attribute_class = binder.bind_attribute(
                attribute.syntax.syntax_tree, name_node, scope, containing_type
            )
        self._pending_attributes = []

        logger.debug(f"Declared {len(self.get_all_types())} types from {len(self._syntax_trees)} syntax trees")

    def _declare_members(
        self,
        syntax_tree: SyntaxTree,
        nodes: list[Node],
        scope: ImportScope,
        containing_type: TypeSymbol | None,
    ) -> None:
        for node in nodes:
            match node.type:
                case "using_directive":
                    self._declare_using(syntax_tree, node, scope)
                case "namespace_declaration":
                    inner = self._enter_namespace(syntax_tree, node, scope)
                    body = declaration_body(node)
                    if body is not None:
                        self._declare_members(syntax_tree, body.children, inner, None)
                case "file_scoped_namespace_declaration":
                    # Later siblings belong to the namespace; newer grammars nest them instead
                    scope = self._enter_namespace(syntax_tree, node, scope)
                    self._declare_members(syntax_tree, node.children, scope, None)
                case "field_declaration":
                    if containing_type is not None:
                        self._declare_fields(syntax_tree, node, scope, containing_type)
                case "property_declaration":
                    if containing_type is not None:
                        self._declare_backing_field(syntax_tree, node, containing_type)
                case "event_field_declaration":
                    if containing_type is not None:
                        self._declare_event_fields(syntax_tree, node, containing_type)
                case node_type if node_type in TYPE_DECLARATIONS:
                    self._declare_type(syntax_tree, node, scope, containing_type)
                case node_type if node_type in TRANSPARENT_NODES:
                    self._declare_members(syntax_tree, node.children, scope, containing_type)
                case _:
                    pass

    def _declare_using(self, syntax_tree: SyntaxTree, node: Node, scope: ImportScope) -> None:
        children = [
            child.named_children[0] if child.type == "type" and child.named_children else child
            for child in node.named_children
        ]
        names = [child for child in children if child.type in _USING_TARGETS]
        if not names:
            return

        alias = None
        name_equals = first_child_of_type(node, "name_equals")
        if name_equals is not None:
            alias = declared_name(name_equals, syntax_tree)
        elif first_child_of_type(node, "=") is not None:
            alias_node = node.child_by_field_name("name") or names[0]
            alias = syntax_tree.text(alias_node)
            names = [child for child in names if child != alias_node] or names

        directive = UsingDirective(
            syntax_tree=syntax_tree,
            name_node=names[-1],
            alias=alias,
            is_static=first_child_of_type(node, "static") is not None,
            is_global=first_child_of_type(node, "global") is not None,
        )
        if directive.is_global:
            self._global_usings.append(directive)
        else:
            scope.usings.append(directive)

    def _enter_namespace(self, syntax_tree: SyntaxTree, node: Node, scope: ImportScope) -> ImportScope:
        name = node.child_by_field_name("name") or first_child_of_type(node, *_USING_TARGETS)
        if name is None:
            return scope
        _, segments = name_parts(name, syntax_tree)
        for segment, _ in segments:
            namespace = scope.namespace.get_namespace(segment)
            scope = ImportScope(namespace=namespace, parent=scope)
        return scope

    def _declare_type(
        self,
        syntax_tree: SyntaxTree,
        node: Node,
        scope: ImportScope,
        containing_type: TypeSymbol | None,
    ) -> None:
        name = declared_name(node, syntax_tree)
        parameters = type_parameters(node, syntax_tree)
        key = (name, len(parameters))
        container = containing_type.nested_types if containing_type is not None else scope.namespace.types

        symbol = container.get(key)
        if symbol is None:
            symbol = TypeSymbol(
                name=name,
                arity=len(parameters),
                kind=TypeKind(type_keyword(node)),
                containing_symbol=containing_type if containing_type is not None else scope.namespace,
                type_parameters=parameters,
            )
            container[key] = symbol
        symbol.declarations.append(SyntaxReference(syntax_tree, node))
        base = base_class_name(node)
        if base is not None and not self._has_pending_base(symbol):
            self._pending_bases.append((symbol, SyntaxReference(syntax_tree, base), scope))
        self._types_by_node[syntax_tree.node_key(node)] = symbol

        body = declaration_body(node)
        if body is not None and symbol.kind != TypeKind.ENUM:
            self._declare_members(syntax_tree, body.children, scope, symbol)

    def _declare_fields(
        self,
        syntax_tree: SyntaxTree,
        node: Node,
        scope: ImportScope,
        containing_type: TypeSymbol,
    ) -> None:
        field_modifiers = modifiers(node, syntax_tree)
        is_const = "const" in field_modifiers
        attribute_names = [
            attribute.child_by_field_name("name") or attribute.named_children[0]
            for attribute_list in children_of_type(node, "attribute_list")
            for attribute in children_of_type(attribute_list, "attribute")
            if attribute.named_children
        ]

        declaration = first_child_of_type(node, "variable_declaration")
        if declaration is None:
            return

        declared = self._fields_by_node.setdefault(syntax_tree.node_key(node), [])
        for declarator in children_of_type(declaration, "variable_declarator"):
            field_symbol = FieldSymbol(
                name=declared_name(declarator, syntax_tree),
                containing_type=containing_type,
                is_static=is_const or "static" in field_modifiers,
                is_const=is_const,
                declaration=SyntaxReference(syntax_tree, declarator),
            )
            for name_node in attribute_names:
                attribute = AttributeData(syntax=SyntaxReference(syntax_tree, name_node))
                field_symbol.attributes.append(attribute)
                self._pending_attributes.append((attribute, name_node, scope, containing_type))
            containing_type.fields.append(field_symbol)
            declared.append(field_symbol)

    def _declare_backing_field(self, syntax_tree: SyntaxTree, node: Node, containing_type: TypeSymbol) -> None:
        """Synthesize the hidden backing field of an auto-property."""
        property_modifiers = modifiers(node, syntax_tree)
        accessor_list = first_child_of_type(node, "accessor_list")
        if accessor_list is None or containing_type.kind == TypeKind.INTERFACE:
            return
        if "abstract" in property_modifiers or "extern" in property_modifiers:
            return

        accessors = children_of_type(accessor_list, "accessor_declaration")
        if not accessors or any(first_child_of_type(a, "block", "arrow_expression_clause") for a in accessors):
            return

        name = declared_name(node, syntax_tree)
        containing_type.fields.append(
            FieldSymbol(
                name=f"<{name}>k__BackingField",
                containing_type=containing_type,
                is_static="static" in property_modifiers,
                can_be_referenced_by_name=False,
                declaration=SyntaxReference(syntax_tree, node),
            )
        )


    def _declare_event_fields(self, syntax_tree: SyntaxTree, node: Node, containing_type: TypeSymbol) -> None:
        """Synthesize the backing fields of a field-like event; they share the event's name."""
        event_modifiers = modifiers(node, syntax_tree)
        if containing_type.kind == TypeKind.INTERFACE:
            return
        if "abstract" in event_modifiers or "extern" in event_modifiers:
            return

        declaration = first_child_of_type(node, "variable_declaration")
        if declaration is None:
            return

        for declarator in children_of_type(declaration, "variable_declarator"):
            containing_type.fields.append(
                FieldSymbol(
                    name=declared_name(declarator, syntax_tree),
                    containing_type=containing_type,
                    is_static="static" in event_modifiers,
                    declaration=SyntaxReference(syntax_tree, declarator),
                )
            )

    def _has_pending_base(self, type_symbol: TypeSymbol) -> bool:
        return any(pending is type_symbol for pending, _, _ in self._pending_bases)


_USING_TARGETS = ("identifier", "qualified_name", "alias_qualified_name", "generic_name")


def _split_arity(name: str) -> tuple[str, int]:
    if "`" in name:
        base, arity = name.split("`", 1)
        return base, int(arity)
    return name, 0
