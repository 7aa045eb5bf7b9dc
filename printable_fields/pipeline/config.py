"""
Configuration for the printable fields generator.

Follows the same plain-dataclass pattern as the rest of the pipeline so a
JSON file can be loaded with ``GeneratorConfig.from_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for writing fragments.

    Controls behavior when a generated file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to parse generated code before writing
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True

    @staticmethod
    def from_dict(d: dict) -> OutputConfig:
        """Create an output config from a dictionary."""
        config = OutputConfig()
        if "mode" in d:
            config.mode = OutputMode(d["mode"])
        if "validate_before_write" in d:
            config.validate_before_write = bool(d["validate_before_write"])
        return config

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "validate_before_write": self.validate_before_write,
        }


@dataclass
class GeneratorConfig:
    """Configuration options for a generation pass."""

    # Prefix of the generated per-field methods (Print + X -> PrintX)
    print_method_prefix: str = "Print"

    # Name of the partial stub method that receives a generated body
    stub_method_name: str = "PrintAllFields"

    # Add "// <auto-generated/>" at the top of each generated fragment
    add_generation_comment: bool = True

    # Report nested types as PF0001 diagnostics instead of dropping them silently
    report_unsupported_types: bool = True

    # Raise SourceParseError on input trees with syntax errors
    strict_parse: bool = False

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if k == "output":
                config.output = OutputConfig.from_dict(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "print_method_prefix": self.print_method_prefix,
            "stub_method_name": self.stub_method_name,
            "add_generation_comment": self.add_generation_comment,
            "report_unsupported_types": self.report_unsupported_types,
            "strict_parse": self.strict_parse,
            "output": self.output.to_dict(),
        }
