from __future__ import annotations

import pytest

from printable_fields.pipeline import Compilation, CSharpParser, GeneratorConfig, PrintableFieldsGenerator


@pytest.fixture
def parser():
    return CSharpParser()


@pytest.fixture
def compile_sources(parser):
    """Build a compilation from ``{path: source}``."""

    def _compile(sources: dict[str, str]) -> Compilation:
        return Compilation(parser.parse(code, path=path) for path, code in sources.items())

    return _compile


@pytest.fixture
def generate(compile_sources):
    """Run a generation pass over ``{path: source}``."""

    def _generate(sources: dict[str, str], config: GeneratorConfig | None = None):
        return PrintableFieldsGenerator(config).execute(compile_sources(sources))

    return _generate
