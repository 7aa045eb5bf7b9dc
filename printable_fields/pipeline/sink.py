"""
Output sink: collects fragments under unique keys.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from .emitter.emitter import Emission
from .errors import FragmentError
from .semantic.symbols import TypeSymbol

logger = logging.getLogger(__name__)

PRINTABLES_SUFFIX = "Printables"


def fragment_key(type_key: str, suffix: str) -> str:
    return f"{type_key}.{suffix}"


def assign_type_keys(types: Iterable[TypeSymbol]) -> dict[TypeSymbol, str]:
    """
    Choose the key stem of each type.

    The simple name is used unless two distinct types share it, in which
    case both use their metadata name (``Geometry.Point``, ``Boxes.Box`1``).

    Args:
        types: Types that will receive fragments

    Returns:
        Mapping from type to key stem
    """
    unique_types = list(dict.fromkeys(types))
    counts = Counter(t.name for t in unique_types)
    return {t: t.name if counts[t.name] == 1 else t.metadata_name for t in unique_types}


class FragmentSink:
    """Ordered registry of generated fragments.

    Rejects empty text and duplicate keys, which the host would refuse.
    """

    def __init__(self):
        self._fragments: dict[str, Emission] = {}

    def add(self, key: str, text: str | None) -> None:
        if not text:
            raise FragmentError(f"Refusing to register empty fragment '{key}'")
        if key in self._fragments:
            raise FragmentError(f"Fragment key '{key}' is already registered")
        logger.debug(f"Registered fragment {key} ({len(text)} chars)")
        self._fragments[key] = Emission(key=key, text=text)

    def add_emission(self, emission: Emission) -> None:
        self.add(emission.key, emission.text)

    @property
    def fragments(self) -> tuple[Emission, ...]:
        return tuple(self._fragments.values())

    def __len__(self) -> int:
        return len(self._fragments)

    def __contains__(self, key: str) -> bool:
        return key in self._fragments
