"""
Name binding for attribute references.

Implements the part of C# name lookup needed to decide which type an
attribute name refers to: enclosing types, enclosing namespaces from the
innermost outwards, using directives (namespace, static and alias) and
``global::`` qualified names. A name that does not resolve, or resolves
ambiguously, binds to None. As in C#, attribute lookup only considers
classes deriving from an attribute class; other types with the same name are
skipped rather than hiding or clashing with the attribute.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tree_sitter import Node

from ..syntax.nodes import name_parts
from ..syntax.parser import SyntaxTree
from .symbols import NamespaceSymbol, TypeSymbol

logger = logging.getLogger(__name__)

ATTRIBUTE_SUFFIX = "Attribute"


@dataclass(eq=False)
class UsingDirective:
    """A ``using`` directive, bound lazily."""

    syntax_tree: SyntaxTree
    name_node: Node = field(repr=False)
    alias: str | None = None
    is_static: bool = False
    is_global: bool = False


@dataclass(eq=False)
class ImportScope:
    """Lexical namespace scope: the namespace whose members are visible plus its usings."""

    namespace: NamespaceSymbol
    parent: ImportScope | None = None
    usings: list[UsingDirective] = field(default_factory=list)
    is_compilation_unit: bool = False


class Binder:
    """Binds attribute names to type symbols."""

    def __init__(self, global_namespace: NamespaceSymbol, global_usings: list[UsingDirective]):
        self.global_namespace = global_namespace
        self.global_usings = global_usings
        self._using_targets: dict[UsingDirective, NamespaceSymbol | TypeSymbol | None] = {}

    def bind_attribute(
        self,
        syntax_tree: SyntaxTree,
        name_node: Node,
        scope: ImportScope,
        containing_type: TypeSymbol | None,
    ) -> TypeSymbol | None:
        """
        Bind the name of an attribute to its attribute class.

        Both ``X`` and ``XAttribute`` are looked up; finding two different
        types is ambiguous and binds to nothing.

        Args:
            syntax_tree: Tree containing the attribute
            name_node: The attribute's name node
            scope: Innermost namespace scope of the declaration
            containing_type: Type declaring the attributed member

        Returns:
            The attribute class, or None if unresolved or ambiguous
        """
        alias, segments = name_parts(name_node, syntax_tree)
        if not segments:
            return None

        *qualifier, (name, arity) = segments
        if name.startswith("@"):
            candidates = [name[1:]]
        else:
            candidates = [name, name + ATTRIBUTE_SUFFIX]

        found = [
            self._bind_type_name(alias, qualifier, candidate, arity, scope, containing_type, attribute_only=True)
            for candidate in candidates
        ]

        matches = []
        for symbol in found:
            if symbol is not None and symbol not in matches:
                matches.append(symbol)

        if len(matches) > 1:
            logger.debug(f"{syntax_tree.path}: attribute name '{name}' is ambiguous between {matches}")
            return None
        return matches[0] if matches else None

    def bind_type(
        self,
        syntax_tree: SyntaxTree,
        name_node: Node,
        scope: ImportScope,
        containing_type: TypeSymbol | None,
    ) -> TypeSymbol | None:
        """Bind a type name, such as a base list entry, to a type declared in the compilation."""
        alias, segments = name_parts(name_node, syntax_tree)
        if not segments:
            return None
        *qualifier, (name, arity) = segments
        return self._bind_type_name(alias, qualifier, name.removeprefix("@"), arity, scope, containing_type)

    def _bind_type_name(
        self,
        alias: str | None,
        qualifier: list[tuple[str, int]],
        name: str,
        arity: int,
        scope: ImportScope,
        containing_type: TypeSymbol | None,
        attribute_only: bool = False,
    ) -> TypeSymbol | None:
        if alias is None and not qualifier:
            return self._lookup_type(name, arity, scope, containing_type, attribute_only)
        container = self._bind_qualifier(alias, qualifier, scope, containing_type)
        if container is None:
            return None
        symbol = self._member_type(container, name, arity)
        return symbol if _is_viable(symbol, attribute_only) else None

    def _lookup_type(
        self,
        name: str,
        arity: int,
        scope: ImportScope | None,
        containing_type: TypeSymbol | None,
        attribute_only: bool = False,
    ) -> TypeSymbol | None:
        """Look up a simple type name the way C# does, innermost scope first.

        With ``attribute_only`` set, types that are not attribute classes are
        passed over and the search continues outwards.
        """
        type_symbol = containing_type
        while type_symbol is not None:
            match = type_symbol.nested_types.get((name, arity))
            if _is_viable(match, attribute_only):
                return match
            type_symbol = type_symbol.containing_type

        current = scope
        while current is not None:
            match = current.namespace.types.get((name, arity))
            if _is_viable(match, attribute_only):
                return match
            target, found = self._lookup_in_usings(current, name, arity, attribute_only)
            if found:
                return target if isinstance(target, TypeSymbol) else None
            current = current.parent
        return None

    def _lookup_namespace_or_type(
        self,
        name: str,
        arity: int,
        scope: ImportScope | None,
        containing_type: TypeSymbol | None,
        use_usings: bool = True,
    ) -> NamespaceSymbol | TypeSymbol | None:
        """Look up the leftmost segment of a qualified name."""
        type_symbol = containing_type
        while type_symbol is not None:
            match = type_symbol.nested_types.get((name, arity))
            if match is not None:
                return match
            type_symbol = type_symbol.containing_type

        current = scope
        while current is not None:
            match = self._descend(current.namespace, name, arity)
            if match is not None:
                return match
            if use_usings:
                target, found = self._lookup_in_usings(current, name, arity)
                if found:
                    return target
            current = current.parent
        return None

    def _lookup_in_usings(
        self, scope: ImportScope, name: str, arity: int, attribute_only: bool = False
    ) -> tuple[NamespaceSymbol | TypeSymbol | None, bool]:
        """Search the using directives of one scope.

        Returns:
            (symbol, found); found is True when the name is decided at this
            scope, with symbol None if it was ambiguous
        """
        usings = list(scope.usings)
        if scope.is_compilation_unit:
            usings.extend(self.global_usings)

        if arity == 0:
            for directive in usings:
                if directive.alias == name:
                    target = self._bind_using(directive, scope)
                    if isinstance(target, TypeSymbol) and not _is_viable(target, attribute_only):
                        continue
                    return target, True

        matches: list[TypeSymbol] = []
        for directive in usings:
            if directive.alias is not None:
                continue
            target = self._bind_using(directive, scope)
            match = None
            if isinstance(target, NamespaceSymbol) and not directive.is_static:
                match = target.types.get((name, arity))
            elif isinstance(target, TypeSymbol) and directive.is_static:
                match = target.nested_types.get((name, arity))
            if _is_viable(match, attribute_only) and match not in matches:
                matches.append(match)

        if len(matches) > 1:
            logger.debug(f"'{name}' is imported from several namespaces: {matches}")
            return None, True
        if matches:
            return matches[0], True
        return None, False

    def _bind_using(self, directive: UsingDirective, scope: ImportScope) -> NamespaceSymbol | TypeSymbol | None:
        """Bind the target of a using directive; targets are looked up without other usings."""
        if directive not in self._using_targets:
            alias, segments = name_parts(directive.name_node, directive.syntax_tree)
            target = None
            if segments:
                (head, head_arity), *rest = segments
                if alias == "global":
                    target = self._descend(self.global_namespace, head, head_arity)
                else:
                    lookup_scope = scope.parent if not scope.is_compilation_unit else scope
                    target = self._lookup_namespace_or_type(head, head_arity, lookup_scope, None, use_usings=False)
                    if target is None:
                        target = self._descend(self.global_namespace, head, head_arity)
                for segment, segment_arity in rest:
                    if target is None:
                        break
                    target = self._descend(target, segment, segment_arity)
            if target is None:
                logger.debug(f"{directive.syntax_tree.path}: using directive target '{directive.syntax_tree.text(directive.name_node)}' not found")
            self._using_targets[directive] = target
        return self._using_targets[directive]

    def _bind_qualifier(
        self,
        alias: str | None,
        qualifier: list[tuple[str, int]],
        scope: ImportScope,
        containing_type: TypeSymbol | None,
    ) -> NamespaceSymbol | TypeSymbol | None:
        """Bind everything left of the final segment of a qualified name."""
        if alias == "global":
            container: NamespaceSymbol | TypeSymbol | None = self.global_namespace
        elif alias is not None:
            container = self._lookup_alias(alias, scope)
        else:
            container = None

        segments = list(qualifier)
        if container is None:
            if alias is not None or not segments:
                return None
            head, head_arity = segments.pop(0)
            container = self._lookup_namespace_or_type(head, head_arity, scope, containing_type)

        for segment, segment_arity in segments:
            if container is None:
                return None
            container = self._descend(container, segment, segment_arity)
        return container

    def _lookup_alias(self, alias: str, scope: ImportScope | None) -> NamespaceSymbol | TypeSymbol | None:
        current = scope
        while current is not None:
            usings = list(current.usings)
            if current.is_compilation_unit:
                usings.extend(self.global_usings)
            for directive in usings:
                if directive.alias == alias:
                    return self._bind_using(directive, current)
            current = current.parent
        return None

    @staticmethod
    def _descend(
        container: NamespaceSymbol | TypeSymbol, name: str, arity: int
    ) -> NamespaceSymbol | TypeSymbol | None:
        if isinstance(container, NamespaceSymbol):
            if arity == 0 and name in container.namespaces:
                return container.namespaces[name]
            return container.types.get((name, arity))
        return container.nested_types.get((name, arity))

    @staticmethod
    def _member_type(container: NamespaceSymbol | TypeSymbol, name: str, arity: int) -> TypeSymbol | None:
        if isinstance(container, NamespaceSymbol):
            return container.types.get((name, arity))
        return container.nested_types.get((name, arity))


def _is_viable(symbol: TypeSymbol | None, attribute_only: bool) -> bool:
    if symbol is None:
        return False
    return symbol.is_attribute_class or not attribute_only
