"""
Field grouping by owning type.
"""

from __future__ import annotations

from collections.abc import Iterable

from .semantic.resolver import ResolvedField
from .semantic.symbols import TypeSymbol


def group_fields_by_type(fields: Iterable[ResolvedField]) -> dict[TypeSymbol, list[ResolvedField]]:
    """
    Partition resolved fields by owning type identity.

    Groups appear in order of their first field; fields keep their relative
    order. Two types with the same simple name are never merged.

    Args:
        fields: Resolved fields in discovery order

    Returns:
        Mapping from owning type to its fields
    """
    groups: dict[TypeSymbol, list[ResolvedField]] = {}
    for resolved in fields:
        if not resolved.has_marker_annotation:
            continue
        groups.setdefault(resolved.owning_type, []).append(resolved)
    return groups
