import json
import logging
from pathlib import Path

import click

from .pipeline import GeneratorConfig, OutputMode, PrintableFieldsError, generate_sources, write_fragments


def collect_sources(paths) -> list[Path]:
    """Expand directories to the .cs files they contain, sorted, without duplicates."""
    sources: list[Path] = []
    for path in map(Path, paths):
        candidates = sorted(path.rglob("*.cs")) if path.is_dir() else [path]
        for candidate in candidates:
            if candidate not in sources:
                sources.append(candidate)
    return sources


@click.command()
@click.option("--output", "-o", default=None, type=click.Path(file_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--force", is_flag=True, default=False, help="Overwrite existing generated files")
@click.option("--list", "list_only", is_flag=True, default=False, help="Print fragment keys instead of writing files")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, resolve_path=True))
def printable_fields(output, config, force, list_only, verbose, paths):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    if force:
        config.output.mode = OutputMode.FORCE

    if output is None and not list_only:
        raise click.UsageError("Missing option '--output' / '-o' (or use --list)")

    sources = collect_sources(paths)
    if not sources:
        raise click.UsageError("No .cs files found")

    try:
        result = generate_sources(sources, config)
        for diagnostic in result.diagnostics:
            click.echo(str(diagnostic), err=True)

        if list_only:
            for key in result.keys:
                click.echo(key)
            return

        written = write_fragments(result.fragments, Path(output), config.output)
    except (PrintableFieldsError, OSError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {len(written)} files in {output}")
