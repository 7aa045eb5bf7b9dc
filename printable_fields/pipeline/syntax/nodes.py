"""
Helpers for reading tree-sitter-c-sharp declaration nodes.

Node shapes differ slightly between grammar releases (field names, record
structs, using aliases), so lookups go through child types where possible
and fall back to field names.
"""

from __future__ import annotations

from tree_sitter import Node

from .parser import SyntaxTree

TYPE_DECLARATIONS = {
    "class_declaration": "class",
    "struct_declaration": "struct",
    "record_declaration": "record",
    "record_struct_declaration": "record struct",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
}

NAME_NODES = ("identifier", "qualified_name", "alias_qualified_name", "generic_name")

# Containers whose children are declarations of the enclosing scope
TRANSPARENT_NODES = ("preproc_if", "preproc_elif", "preproc_else", "ERROR")


def children_of_type(node: Node, *types: str) -> list[Node]:
    return [child for child in node.children if child.type in types]


def first_child_of_type(node: Node, *types: str) -> Node | None:
    for child in node.children:
        if child.type in types:
            return child
    return None


def modifiers(node: Node, tree: SyntaxTree) -> list[str]:
    """Get the modifier keywords of a declaration, in source order."""
    return [tree.text(child) for child in node.children if child.type == "modifier"]


def declared_name(node: Node, tree: SyntaxTree) -> str:
    """Get the identifier a declaration introduces."""
    name = node.child_by_field_name("name")
    if name is None or name.type != "identifier":
        name = first_child_of_type(node, "identifier")
    return tree.text(name)


def type_keyword(node: Node) -> str:
    """Get the declaration keyword for a type declaration node (class, struct, record struct...)."""
    keyword = TYPE_DECLARATIONS[node.type]
    if node.type == "record_declaration" and first_child_of_type(node, "struct") is not None:
        return "record struct"
    return keyword


def type_parameters(node: Node, tree: SyntaxTree) -> list[str]:
    """Get the type parameter names declared on a type or method."""
    parameter_list = first_child_of_type(node, "type_parameter_list")
    if parameter_list is None:
        return []
    names = []
    for parameter in children_of_type(parameter_list, "type_parameter"):
        name = parameter.child_by_field_name("name") or first_child_of_type(parameter, "identifier")
        names.append(tree.text(name))
    return names


def declaration_body(node: Node) -> Node | None:
    """Get the member list of a type declaration."""
    return first_child_of_type(node, "declaration_list", "enum_member_declaration_list")


def parameter_count(method: Node) -> int:
    """Count the parameters of a method declaration."""
    parameters = method.child_by_field_name("parameters") or first_child_of_type(method, "parameter_list")
    if parameters is None:
        return 0
    return sum(1 for child in parameters.named_children if child.type != "comment")


def return_type(method: Node, tree: SyntaxTree) -> str:
    node = method.child_by_field_name("returns") or method.child_by_field_name("type")
    return tree.text(node) if node is not None else "void"


def name_parts(node: Node, tree: SyntaxTree) -> tuple[str | None, list[tuple[str, int]]]:
    """Split a name node into an optional alias and (identifier, arity) segments.

    ``global::A.B<T>`` gives ``("global", [("A", 0), ("B", 1)])``.
    """
    match node.type:
        case "identifier":
            return None, [(tree.text(node), 0)]
        case "generic_name":
            identifier = first_child_of_type(node, "identifier")
            arguments = first_child_of_type(node, "type_argument_list")
            arity = len(arguments.named_children) if arguments is not None else 0
            return None, [(tree.text(identifier), arity)]
        case "qualified_name":
            qualifier = node.child_by_field_name("qualifier")
            name = node.child_by_field_name("name")
            if qualifier is None or name is None:
                named = [child for child in node.named_children if child.type in NAME_NODES]
                qualifier, name = named[0], named[-1]
            alias, head = name_parts(qualifier, tree)
            _, tail = name_parts(name, tree)
            return alias, head + tail
        case "alias_qualified_name":
            alias = node.child_by_field_name("alias")
            name = node.child_by_field_name("name")
            if alias is None or name is None:
                alias, name = node.children[0], node.children[-1]
            _, segments = name_parts(name, tree)
            return tree.text(alias), segments
        case _:
            return None, []


def base_class_name(node: Node) -> Node | None:
    """Get the first entry of a type's base list, the only one that can name a base class."""
    base_list = first_child_of_type(node, "base_list")
    if base_list is None:
        return None
    for child in base_list.named_children:
        if child.type in ("type", "primary_constructor_base_type") and child.named_children:
            child = child.named_children[0]
        return child if child.type in NAME_NODES else None
    return None
