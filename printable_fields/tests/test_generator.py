"""
End-to-end tests for a generation pass.
"""

from __future__ import annotations

import pytest

from printable_fields.pipeline import GeneratorConfig, PrintableFieldsGenerator, generate_sources
from printable_fields.pipeline.diagnostics import UNSUPPORTED_NESTED_TYPE, DiagnosticSeverity
from printable_fields.pipeline.marker import MARKER_FRAGMENT_KEY, MARKER_SOURCE

POINT = """
using PrintableFields;

namespace Geometry
{
    public partial class Point
    {
        [Printable] public int X;
        public int Y;
    }
}
"""

WIDGET = """
namespace UI
{
    public partial class Widget
    {
        public int Width;
        public int Height;

        public partial void PrintAllFields();
    }
}
"""

NESTED = """
using PrintableFields;

namespace Geometry
{
    public partial class Outer
    {
        public partial class Inner
        {
            [Printable] public int Value;

            partial void PrintAllFields();
        }
    }
}
"""


class TestScenarios:
    """The documented example scenarios."""

    def test_marked_field_produces_one_method(self, generate):
        result = generate({"Point.cs": POINT})
        text = result.get("Point.Printables")
        assert text is not None
        assert text.count("private void Print") == 1
        assert "private void PrintX()" in text
        assert 'Console.WriteLine("X: " + X.ToString());' in text
        assert "PrintY" not in text

    def test_stub_prints_fields_in_order(self, generate):
        result = generate({"Widget.cs": WIDGET})
        text = result.get("Widget.PrintAllFields")
        assert text is not None
        assert "public partial void PrintAllFields()" in text
        width = text.index('Console.WriteLine("Width: " + Width.ToString());')
        height = text.index('Console.WriteLine("Height: " + Height.ToString());')
        assert width < height

    def test_nested_type_produces_no_fragment(self, generate):
        result = generate({"Nested.cs": NESTED})
        assert result.keys == [MARKER_FRAGMENT_KEY]
        assert not any("Inner" in key for key in result.keys)

    def test_rerun_is_identical(self, compile_sources):
        compilation = compile_sources({"Point.cs": POINT, "Widget.cs": WIDGET})
        generator = PrintableFieldsGenerator()
        first = generator.execute(compilation)
        second = generator.execute(compilation)
        assert first.fragments == second.fragments

    def test_rerun_from_fresh_parse_is_identical(self, generate):
        sources = {"Point.cs": POINT, "Widget.cs": WIDGET, "Nested.cs": NESTED}
        assert generate(sources).fragments == generate(sources).fragments


class TestGenerationPass:
    """Tests for keys, ordering and diagnostics."""

    def test_marker_fragment_is_always_registered_first(self, generate):
        result = generate({"Empty.cs": "namespace N { class C { } }"})
        assert result.keys == [MARKER_FRAGMENT_KEY]
        assert result.get(MARKER_FRAGMENT_KEY) == MARKER_SOURCE

    def test_type_with_both_paths(self, generate):
        source = """
        using PrintableFields;
        namespace N
        {
            partial class Both
            {
                [Printable] int a;
                int b;
                partial void PrintAllFields();
            }
        }
        """
        result = generate({"Both.cs": source})
        assert result.keys == [MARKER_FRAGMENT_KEY, "Both.Printables", "Both.PrintAllFields"]
        assert "Printa" in result.get("Both.Printables")
        assert 'Console.WriteLine("b: " + b.ToString());' in result.get("Both.PrintAllFields")

    def test_fields_from_several_files_share_one_fragment(self, generate):
        sources = {
            "a.cs": "using PrintableFields;\nnamespace N { partial class P { [Printable] int a; } }",
            "b.cs": "using PrintableFields;\nnamespace N { partial class P { [Printable] int b; } }",
        }
        result = generate(sources)
        text = result.get("P.Printables")
        assert text.index("Printa()") < text.index("Printb()")
        assert result.keys.count("P.Printables") == 1

    def test_colliding_type_names_use_metadata_names(self, generate):
        source = """
        using PrintableFields;
        namespace A { partial class Point { [Printable] int x; } }
        namespace B { partial class Point { [Printable] int y; } }
        """
        result = generate({"p.cs": source})
        assert result.keys == [MARKER_FRAGMENT_KEY, "A.Point.Printables", "B.Point.Printables"]
        assert "namespace A" in result.get("A.Point.Printables")
        assert "namespace B" in result.get("B.Point.Printables")

    def test_nested_types_are_reported(self, generate):
        result = generate({"Nested.cs": NESTED})
        assert len(result.diagnostics) == 2
        assert all(d.id == UNSUPPORTED_NESTED_TYPE for d in result.diagnostics)
        assert all(d.severity == DiagnosticSeverity.WARNING for d in result.diagnostics)
        assert all(d.path == "Nested.cs" for d in result.diagnostics)
        assert "Geometry.Outer+Inner" in result.diagnostics[0].message
        assert "PF0001" in str(result.diagnostics[0])

    def test_nested_reports_can_be_disabled(self, generate):
        result = generate({"Nested.cs": NESTED}, GeneratorConfig(report_unsupported_types=False))
        assert result.diagnostics == []

    def test_nested_type_does_not_block_other_types(self, generate):
        result = generate({"Nested.cs": NESTED, "Point.cs": POINT, "Widget.cs": WIDGET})
        assert result.keys == [MARKER_FRAGMENT_KEY, "Point.Printables", "Widget.PrintAllFields"]

    def test_broken_attribute_does_not_block_other_fields(self, generate):
        source = "using PrintableFields;\nnamespace N { partial class C { [Missing.Thing] int a; [Printable] int b; } }"
        text = generate({"c.cs": source}).get("C.Printables")
        assert "Printb" in text
        assert "Printa" not in text

    def test_custom_stub_name_changes_key(self, generate):
        source = "partial class Dumper { int value; partial void Dump(); }"
        result = generate({"d.cs": source}, GeneratorConfig(stub_method_name="Dump"))
        assert "Dumper.Dump" in result.keys
        assert "partial void Dump()" in result.get("Dumper.Dump")

    def test_generic_type_repeats_type_parameters(self, generate):
        source = "using PrintableFields;\nnamespace N { partial class Box<T> { [Printable] T item; } }"
        text = generate({"b.cs": source}).get("Box.Printables")
        assert "partial class Box<T>" in text

    def test_struct_keeps_its_kind(self, generate):
        source = "namespace N { partial struct Vec { float x; float y; partial void PrintAllFields(); } }"
        text = generate({"v.cs": source}).get("Vec.PrintAllFields")
        assert "partial struct Vec" in text

    def test_same_named_plain_class_does_not_hide_marker(self, generate):
        source = "using PrintableFields;\nnamespace N { class Printable { } partial class C { [Printable] int x; } }"
        result = generate({"c.cs": source})
        assert "C.Printables" in result.keys
        assert "Printx()" in result.get("C.Printables")

    def test_event_backing_field_is_printed(self, generate):
        source = "partial class S { public event System.Action E; int a; partial void PrintAllFields(); }"
        text = generate({"s.cs": source}).get("S.PrintAllFields")
        assert 'Console.WriteLine("E: " + E.ToString());' in text
        assert 'Console.WriteLine("a: " + a.ToString());' in text


class TestGenerateSources:
    """Tests for the generate_sources helper."""

    def test_from_mapping(self):
        result = generate_sources({"Point.cs": POINT})
        assert "Point.Printables" in result.keys

    def test_from_paths(self, tmp_path):
        path = tmp_path / "Widget.cs"
        path.write_text(WIDGET)
        result = generate_sources([path])
        assert "Widget.PrintAllFields" in result.keys

    def test_strict_parse_rejects_broken_source(self):
        from printable_fields.pipeline import SourceParseError

        with pytest.raises(SourceParseError):
            generate_sources({"Broken.cs": "namespace N { class C { int x }"}, GeneratorConfig(strict_parse=True))

    def test_lenient_parse_continues(self):
        result = generate_sources({"Broken.cs": "namespace N { class C { int x }", "Point.cs": POINT})
        assert "Point.Printables" in result.keys
