"""
Tests for GeneratorConfig.
"""

from __future__ import annotations

import pytest

from printable_fields.pipeline import GeneratorConfig, OutputMode


class TestGeneratorConfig:
    """Tests for config loading."""

    def test_defaults(self):
        config = GeneratorConfig()
        assert config.print_method_prefix == "Print"
        assert config.stub_method_name == "PrintAllFields"
        assert config.add_generation_comment
        assert config.report_unsupported_types
        assert not config.strict_parse
        assert config.output.mode == OutputMode.ERROR_IF_EXISTS

    def test_from_dict(self):
        config = GeneratorConfig.from_dict(
            {
                "print_method_prefix": "Show",
                "strict_parse": True,
                "output": {"mode": "force", "validate_before_write": False},
                "unknown_option": 1,
            }
        )
        assert config.print_method_prefix == "Show"
        assert config.strict_parse
        assert config.output.mode == OutputMode.FORCE
        assert not config.output.validate_before_write
        assert not hasattr(config, "unknown_option")

    def test_round_trip(self):
        config = GeneratorConfig(stub_method_name="Dump", add_generation_comment=False)
        assert GeneratorConfig.from_dict(config.to_dict()) == config

    def test_invalid_output_mode(self):
        with pytest.raises(ValueError):
            GeneratorConfig.from_dict({"output": {"mode": "merge"}})
