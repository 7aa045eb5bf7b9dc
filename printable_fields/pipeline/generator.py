"""
The generation pass.

Runs scan -> resolve -> group -> emit -> register over a compilation and
returns the fragments together with any diagnostics. Every call builds
fresh scanner and resolver state; nothing is shared between passes except
the read-only syntax trees.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .config import GeneratorConfig
from .diagnostics import Diagnostic, unsupported_nested_type
from .emitter.emitter import CodeEmitter, Emission
from .grouping import group_fields_by_type
from .marker import MARKER_FRAGMENT_KEY, MARKER_SOURCE
from .semantic.compilation import Compilation
from .semantic.resolver import SymbolResolver
from .sink import PRINTABLES_SUFFIX, FragmentSink, assign_type_keys, fragment_key
from .syntax.parser import CSharpParser
from .syntax.scanner import SyntaxScanner

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Output of one generation pass."""

    fragments: tuple[Emission, ...] = ()
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def keys(self) -> list[str]:
        return [fragment.key for fragment in self.fragments]

    def get(self, key: str) -> str | None:
        """Get the text of a fragment by key."""
        for fragment in self.fragments:
            if fragment.key == key:
                return fragment.text
        return None


class PrintableFieldsGenerator:
    """Generates print methods for [Printable] fields and PrintAllFields stubs."""

    def __init__(self, config: GeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            config: Generation options; defaults are used when omitted
        """
        self.config = config or GeneratorConfig()

    def create_scanner(self) -> SyntaxScanner:
        return SyntaxScanner(stub_method_name=self.config.stub_method_name)

    def execute(self, compilation: Compilation) -> GenerationResult:
        """
        Run one generation pass.

        Args:
            compilation: The caller's compilation; it is never modified

        Returns:
            The registered fragments (marker definition first) and diagnostics

        Raises:
            FragmentError: If two fragments would share a key
        """
        scanner = self.create_scanner().scan(compilation.syntax_trees)
        logger.debug(
            f"Scanned {len(compilation.syntax_trees)} trees: {len(scanner.candidate_fields)} field candidates, "
            f"{len(scanner.candidate_methods)} stub candidates"
        )

        resolver = SymbolResolver(compilation, CSharpParser())
        groups = group_fields_by_type(resolver.resolve_fields(scanner.candidate_fields))
        stubs = resolver.resolve_stubs(scanner.candidate_methods)

        top_level = [t for t in groups if t.is_top_level] + [s.owning_type for s in stubs if s.owning_type.is_top_level]
        type_keys = assign_type_keys(top_level)

        emitter = CodeEmitter(self.config)
        diagnostics: list[Diagnostic] = []
        sink = FragmentSink()
        sink.add(MARKER_FRAGMENT_KEY, MARKER_SOURCE)

        for owning_type, fields in groups.items():
            emission = None
            if owning_type in type_keys:
                key = fragment_key(type_keys[owning_type], PRINTABLES_SUFFIX)
                emission = emitter.emit_printables(owning_type, fields, key)
            if emission is None:
                self._report_unsupported(diagnostics, unsupported_nested_type(owning_type, "Printable methods"))
                continue
            sink.add_emission(emission)

        for group in stubs:
            emission = None
            if group.owning_type in type_keys:
                key = fragment_key(type_keys[group.owning_type], self.config.stub_method_name)
                emission = emitter.emit_print_all_fields(group, key)
            if emission is None:
                origin = f"{self.config.stub_method_name}()"
                self._report_unsupported(diagnostics, unsupported_nested_type(group.owning_type, origin, group.stub))
                continue
            sink.add_emission(emission)

        logger.debug(f"Generated {len(sink)} fragments, {len(diagnostics)} diagnostics")
        return GenerationResult(fragments=sink.fragments, diagnostics=diagnostics)

    def _report_unsupported(self, diagnostics: list[Diagnostic], diagnostic: Diagnostic) -> None:
        logger.info(str(diagnostic))
        if self.config.report_unsupported_types:
            diagnostics.append(diagnostic)


def generate_sources(
    sources: Mapping[str, str] | Iterable[Path],
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """
    Parse C# sources and run a generation pass over them.

    Args:
        sources: Mapping of path to source text, or paths of .cs files
        config: Generation options

    Returns:
        The generation result

    Raises:
        SourceParseError: If ``strict_parse`` is set and a source has syntax errors
    """
    config = config or GeneratorConfig()
    parser = CSharpParser(strict=config.strict_parse)

    if isinstance(sources, Mapping):
        items = list(sources.items())
    else:
        items = [(str(path), Path(path).read_text(encoding="utf-8")) for path in sources]

    compilation = Compilation(parser.parse(code, path=path) for path, code in items)
    return PrintableFieldsGenerator(config).execute(compilation)
