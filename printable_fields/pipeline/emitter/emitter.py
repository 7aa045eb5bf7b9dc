"""
C# code emitter.

Turns resolved groups into source fragments using fixed Jinja2 templates.
Rendering is a pure function of the names passed in, so the same input
always produces byte-identical text.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import jinja2

from ..config import GeneratorConfig
from ..semantic.resolver import ResolvedField, ResolvedStubGroup
from ..semantic.symbols import TypeSymbol

TEMPLATE_DIR = Path(__file__).parent / "templates"

GENERATION_COMMENT = "// <auto-generated/>"


@dataclass(frozen=True)
class Emission:
    """A generated source fragment and the key it is registered under."""

    key: str
    text: str


def create_environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
        autoescape=False,
    )


_environment = create_environment()


def render_fragment(body: str, namespace: str = "", generation_comment: str = "") -> str:
    """Wrap a type body in the using directive and its namespace."""
    template = _environment.get_template("fragment.cs.jinja2")
    return template.render(body=body, namespace=namespace, generation_comment=generation_comment)


def render_printables(
    type_declaration: str,
    field_names: Sequence[str],
    namespace: str = "",
    prefix: str = "Print",
    generation_comment: str = "",
) -> str:
    """
    Render one private print method per field.

    Args:
        type_declaration: Partial declaration header, e.g. ``partial class Point``
        field_names: Field names in discovery order
        namespace: Containing namespace, empty for the global namespace
        prefix: Method name prefix
        generation_comment: Optional first line

    Returns:
        The fragment source text
    """
    body = _environment.get_template("printables.cs.jinja2").render(
        type_declaration=type_declaration,
        fields=list(field_names),
        prefix=prefix,
    )
    return render_fragment(body, namespace, generation_comment)


def render_print_all_fields(
    type_declaration: str,
    method_signature: str,
    field_names: Sequence[str],
    namespace: str = "",
    generation_comment: str = "",
) -> str:
    """
    Render the body of the print-all stub: one print statement per field.

    Args:
        type_declaration: Partial declaration header
        method_signature: Signature of the implementing declaration
        field_names: Fields to print, in order
        namespace: Containing namespace, empty for the global namespace
        generation_comment: Optional first line

    Returns:
        The fragment source text
    """
    body = _environment.get_template("print_all_fields.cs.jinja2").render(
        type_declaration=type_declaration,
        method_signature=method_signature,
        fields=list(field_names),
    )
    return render_fragment(body, namespace, generation_comment)


def type_declaration(type_symbol: TypeSymbol) -> str:
    """Partial declaration header repeating the type's kind and type parameters."""
    declaration = f"partial {type_symbol.kind.value} {type_symbol.name}"
    if type_symbol.type_parameters:
        declaration += f"<{', '.join(type_symbol.type_parameters)}>"
    return declaration


def method_signature(group: ResolvedStubGroup) -> str:
    return " ".join([*group.method_modifiers, group.return_type, f"{group.method_name}()"])


class CodeEmitter:
    """Emits the per-field and print-all fragments for top-level types."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    @property
    def generation_comment(self) -> str:
        return GENERATION_COMMENT if self.config.add_generation_comment else ""

    def emit_printables(self, owning_type: TypeSymbol, fields: Sequence[ResolvedField], key: str) -> Emission | None:
        """Emit print methods for the marked fields of a type; None for nested types."""
        if not owning_type.is_top_level:
            return None
        text = render_printables(
            type_declaration(owning_type),
            [f.name for f in fields],
            namespace=owning_type.containing_namespace.display_string(),
            prefix=self.config.print_method_prefix,
            generation_comment=self.generation_comment,
        )
        return Emission(key=key, text=text)

    def emit_print_all_fields(self, group: ResolvedStubGroup, key: str) -> Emission | None:
        """Emit the stub implementation for a type; None for nested types."""
        owning_type = group.owning_type
        if not owning_type.is_top_level:
            return None
        text = render_print_all_fields(
            type_declaration(owning_type),
            method_signature(group),
            group.field_names,
            namespace=owning_type.containing_namespace.display_string(),
            generation_comment=self.generation_comment,
        )
        return Emission(key=key, text=text)
