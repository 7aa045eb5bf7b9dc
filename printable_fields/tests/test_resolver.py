"""
Tests for SymbolResolver: marker confirmation by identity and stub field
enumeration.
"""

from __future__ import annotations

import pytest

from printable_fields.pipeline.semantic import SymbolResolver
from printable_fields.pipeline.syntax import SyntaxScanner


def resolve(compilation):
    scanner = SyntaxScanner().scan(compilation.syntax_trees)
    resolver = SymbolResolver(compilation)
    return resolver, resolver.resolve_fields(scanner.candidate_fields), resolver.resolve_stubs(scanner.candidate_methods)


def marked(compile_sources, source: str) -> list[str]:
    _, fields, _ = resolve(compile_sources({"test.cs": source}))
    return [f.name for f in fields]


class TestMarkerResolution:
    """Tests for confirming the [Printable] attribute."""

    @pytest.mark.parametrize(
        "attribute",
        [
            "Printable",
            "PrintableAttribute",
            "PrintableFields.Printable",
            "PrintableFields.PrintableAttribute",
            "global::PrintableFields.Printable",
            "Printable()",
        ],
    )
    def test_marker_spellings_with_using(self, compile_sources, attribute):
        source = f"using PrintableFields;\nnamespace N {{ partial class C {{ [{attribute}] int x; int y; }} }}"
        assert marked(compile_sources, source) == ["x"]

    def test_qualified_name_without_using(self, compile_sources):
        source = "namespace N { partial class C { [PrintableFields.Printable] int x; } }"
        assert marked(compile_sources, source) == ["x"]

    def test_simple_name_without_using_does_not_bind(self, compile_sources):
        source = "namespace N { partial class C { [Printable] int x; } }"
        assert marked(compile_sources, source) == []

    def test_using_inside_namespace(self, compile_sources):
        source = "namespace N { using PrintableFields; partial class C { [Printable] int x; } }"
        assert marked(compile_sources, source) == ["x"]

    def test_enclosing_namespace_lookup(self, compile_sources):
        source = "namespace PrintableFields.Samples { partial class C { [Printable] int x; } }"
        assert marked(compile_sources, source) == ["x"]

    def test_using_alias(self, compile_sources):
        source = "using P = PrintableFields.PrintableAttribute;\nnamespace N { partial class C { [P] int x; } }"
        assert marked(compile_sources, source) == ["x"]

    def test_namespace_alias_qualifier(self, compile_sources):
        source = "using PF = PrintableFields;\nnamespace N { partial class C { [PF::Printable] int a; [PF.Printable] int b; } }"
        assert marked(compile_sources, source) == ["a", "b"]

    def test_global_using_from_another_file(self, compile_sources):
        sources = {
            "usings.cs": "global using PrintableFields;",
            "c.cs": "namespace N { partial class C { [Printable] int x; } }",
        }
        _, fields, _ = resolve(compile_sources(sources))
        assert [f.name for f in fields] == ["x"]

    def test_same_named_unrelated_attribute_is_not_the_marker(self, compile_sources):
        source = """
        using System;
        using Other;
        namespace Other { class PrintableAttribute : Attribute { } }
        namespace N { partial class C { [Printable] int x; } }
        """
        assert marked(compile_sources, source) == []

    def test_local_type_shadows_imported_marker(self, compile_sources):
        source = """
        using PrintableFields;
        namespace N
        {
            class PrintableAttribute : System.Attribute { }
            partial class C { [Printable] int x; }
        }
        """
        assert marked(compile_sources, source) == []

    @pytest.mark.parametrize(
        "declaration",
        [
            "class Printable { }",
            "interface Printable { }",
            "struct Printable { }",
            "enum Printable { A }",
            "class PrintableAttribute { }",
            "class Printable : IComparable { }",
        ],
    )
    def test_non_attribute_type_does_not_hide_marker(self, compile_sources, declaration):
        source = f"""
        using PrintableFields;
        namespace N
        {{
            interface IComparable {{ }}
            {declaration}
            partial class C {{ [Printable] int x; }}
        }}
        """
        assert marked(compile_sources, source) == ["x"]

    def test_local_attribute_subclass_shadows_imported_marker(self, compile_sources):
        source = """
        using PrintableFields;
        namespace N
        {
            class BaseAttribute : System.Attribute { }
            class PrintableAttribute : BaseAttribute { }
            partial class C { [Printable] int x; }
        }
        """
        assert marked(compile_sources, source) == []

    def test_ambiguous_import_is_not_a_match(self, compile_sources):
        source = """
        using Other;
        using PrintableFields;
        namespace Other { class PrintableAttribute : System.Attribute { } }
        namespace N { partial class C { [Printable] int x; } }
        """
        assert marked(compile_sources, source) == []

    def test_unresolvable_attribute_is_dropped(self, compile_sources):
        source = "using PrintableFields;\nnamespace N { partial class C { [DoesNotExist] int a; [Printable] int b; } }"
        assert marked(compile_sources, source) == ["b"]

    def test_marker_among_other_attributes(self, compile_sources):
        source = "using System; using PrintableFields;\nnamespace N { partial class C { [Obsolete, Printable] int a; [NonSerialized][Printable] int b; } }"
        assert marked(compile_sources, source) == ["a", "b"]

    def test_every_declarator_is_resolved(self, compile_sources):
        source = "using PrintableFields;\nnamespace N { partial class C { [Printable] int a, b; } }"
        assert marked(compile_sources, source) == ["a", "b"]

    def test_owning_type_identity(self, compile_sources):
        source = "using PrintableFields;\nnamespace A { partial class P { [Printable] int x; } }\nnamespace B { partial class P { [Printable] int y; } }"
        resolver, fields, _ = resolve(compile_sources({"p.cs": source}))
        assert fields[0].owning_type is resolver.compilation.get_type_by_metadata_name("A.P")
        assert fields[1].owning_type is resolver.compilation.get_type_by_metadata_name("B.P")
        assert all(f.has_marker_annotation for f in fields)

    def test_original_compilation_is_not_modified(self, compile_sources):
        compilation = compile_sources({"c.cs": "namespace N { class C { } }"})
        resolver = SymbolResolver(compilation)
        assert resolver.marker_symbol is not None
        assert resolver.compilation is not compilation
        assert len(compilation.syntax_trees) == 1
        assert compilation.get_type_by_metadata_name("PrintableFields.PrintableAttribute") is None


WIDGET = """
namespace UI
{
    public class Control
    {
        public int Inherited;
    }

    public partial class Widget : Control
    {
        public int Width;
        public static int Instances;
        public const string Kind = "widget";
        public int Height;
        public string Title { get; set; }
        private readonly bool visible;

        public partial void PrintAllFields();
    }
}
"""


class TestStubResolution:
    """Tests for the PrintAllFields stub path."""

    def test_fields_in_declaration_order(self, compile_sources):
        _, _, stubs = resolve(compile_sources({"w.cs": WIDGET}))
        assert len(stubs) == 1
        assert stubs[0].owning_type.name == "Widget"
        assert stubs[0].field_names == ("Width", "Height", "visible")

    def test_inherited_static_and_backing_fields_excluded(self, compile_sources):
        _, _, stubs = resolve(compile_sources({"w.cs": WIDGET}))
        names = stubs[0].field_names
        assert "Inherited" not in names
        assert "Instances" not in names
        assert "Kind" not in names
        assert not any("BackingField" in name for name in names)

    def test_stub_signature_is_captured(self, compile_sources):
        _, _, stubs = resolve(compile_sources({"w.cs": WIDGET}))
        assert stubs[0].method_modifiers == ("public", "partial")
        assert stubs[0].return_type == "void"
        assert stubs[0].method_name == "PrintAllFields"

    def test_fields_across_partial_declarations(self, compile_sources):
        sources = {
            "a.cs": "partial class Pair { int first; partial void PrintAllFields(); }",
            "b.cs": "partial class Pair { int second; }",
        }
        _, _, stubs = resolve(compile_sources(sources))
        assert stubs[0].field_names == ("first", "second")

    def test_one_group_per_type(self, compile_sources):
        sources = {
            "a.cs": "partial class Pair { int first; partial void PrintAllFields(); }",
            "b.cs": "partial class Pair { partial void PrintAllFields() { } }",
        }
        _, _, stubs = resolve(compile_sources(sources))
        assert len(stubs) == 1

    def test_type_without_fields(self, compile_sources):
        _, _, stubs = resolve(compile_sources({"e.cs": "partial class Empty { partial void PrintAllFields(); }"}))
        assert stubs[0].field_names == ()

    def test_field_like_events_are_printed(self, compile_sources):
        source = """
        partial class S
        {
            public event System.Action E;
            public static event System.Action Shared;
            public event System.Action Custom { add { } remove { } }
            int a;
            partial void PrintAllFields();
        }
        """
        _, _, stubs = resolve(compile_sources({"s.cs": source}))
        assert stubs[0].field_names == ("E", "a")
