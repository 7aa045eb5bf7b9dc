"""
Atomic writing of generated fragments.

Ensures that file writes are atomic so an interrupted run never leaves a
half-written fragment behind.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path

from .config import OutputConfig, OutputMode
from .emitter.emitter import Emission
from .errors import OutputExistsError, SourceParseError
from .syntax.parser import CSharpParser

logger = logging.getLogger(__name__)

FRAGMENT_EXTENSION = ".cs"


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_csharp: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_csharp: Optional validation function for C# code
        """
        self._validate_csharp = validate_csharp or self._default_validate_csharp

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            SourceParseError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

            if validate:
                self._validate_csharp(content)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def _default_validate_csharp(self, content: str) -> None:
        """Default C# validation: the fragment must parse without errors.

        Raises:
            SourceParseError: If validation fails
        """
        CSharpParser(strict=True).parse(content, path="<generated>")

        if "class " not in content and "struct " not in content and "record " not in content and "interface " not in content:
            raise SourceParseError("Generated C# code has no type definitions")

        if "using " not in content:
            raise SourceParseError("Generated C# code is missing using statements")


def fragment_path(output_dir: Path, key: str) -> Path:
    return output_dir / f"{key}{FRAGMENT_EXTENSION}"


def write_fragments(
    fragments: Iterable[Emission],
    output_dir: Path,
    output_config: OutputConfig | None = None,
    writer: AtomicWriter | None = None,
) -> list[Path]:
    """
    Write each fragment to ``<output_dir>/<key>.cs``.

    Args:
        fragments: Fragments to write
        output_dir: Target directory, created if missing
        output_config: Overwrite and validation options
        writer: Writer to use, mainly for tests

    Returns:
        Paths written or already up to date, in fragment order

    Raises:
        OutputExistsError: If a file with different content exists and the
            mode is ERROR_IF_EXISTS; nothing is written in that case
        SourceParseError: If validation is enabled and a fragment does not parse
    """
    output_config = output_config or OutputConfig()
    writer = writer or AtomicWriter()
    output_dir = Path(output_dir)

    targets = [(fragment, fragment_path(output_dir, fragment.key)) for fragment in fragments]

    up_to_date = set()
    if output_config.mode == OutputMode.ERROR_IF_EXISTS:
        for fragment, path in targets:
            if not path.exists():
                continue
            if path.read_text(encoding="utf-8") != fragment.text:
                raise OutputExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
            up_to_date.add(path)

    paths = []
    for fragment, path in targets:
        if path in up_to_date:
            logger.debug(f"{path} is up to date")
            paths.append(path)
            continue

        writer.write(path, fragment.text, validate=output_config.validate_before_write)
        logger.debug(f"Wrote {path}")
        paths.append(path)
    return paths
