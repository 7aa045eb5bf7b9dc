"""
Tests for the printable_fields command line.
"""

from __future__ import annotations

import json

from click.testing import CliRunner

from printable_fields.printable_fields import printable_fields

POINT = """
using PrintableFields;

namespace Geometry
{
    public partial class Point
    {
        [Printable] public int X;
    }

    public partial class Outer
    {
        public partial class Inner
        {
            [Printable] public int Value;
        }
    }
}
"""


class TestCli:
    """Tests for the click command."""

    def test_writes_fragments(self, tmp_path):
        source = tmp_path / "src" / "Point.cs"
        source.parent.mkdir()
        source.write_text(POINT)
        out = tmp_path / "generated"

        result = CliRunner().invoke(printable_fields, [str(source.parent), "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == [
            "Point.Printables.cs",
            "PrintableFields.PrintableAttribute.cs",
        ]
        assert "PrintX" in (out / "Point.Printables.cs").read_text()

    def test_list_only(self, tmp_path):
        source = tmp_path / "Point.cs"
        source.write_text(POINT)

        result = CliRunner().invoke(printable_fields, [str(source), "--list"])

        assert result.exit_code == 0, result.output
        assert "PrintableFields.PrintableAttribute" in result.output
        assert "Point.Printables" in result.output
        assert "PF0001" in result.output

    def test_output_required_unless_listing(self, tmp_path):
        source = tmp_path / "Point.cs"
        source.write_text(POINT)
        result = CliRunner().invoke(printable_fields, [str(source)])
        assert result.exit_code == 2

    def test_existing_output_requires_force(self, tmp_path):
        source = tmp_path / "Point.cs"
        source.write_text(POINT)
        out = tmp_path / "generated"
        out.mkdir()
        (out / "Point.Printables.cs").write_text("// stale\n")

        result = CliRunner().invoke(printable_fields, [str(source), "-o", str(out)])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = CliRunner().invoke(printable_fields, [str(source), "-o", str(out), "--force"])
        assert result.exit_code == 0, result.output
        assert "PrintX" in (out / "Point.Printables.cs").read_text()

    def test_config_file(self, tmp_path):
        source = tmp_path / "Point.cs"
        source.write_text(POINT)
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"print_method_prefix": "Show", "add_generation_comment": False}))
        out = tmp_path / "generated"

        result = CliRunner().invoke(printable_fields, [str(source), "-o", str(out), "-c", str(config)])

        assert result.exit_code == 0, result.output
        text = (out / "Point.Printables.cs").read_text()
        assert "private void ShowX()" in text
        assert text.startswith("using System;")
