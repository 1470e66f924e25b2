"""Build mode detection.

Input that is non-empty and holds only mappings or sequences at its top level
is a collection of records; anything else is a single record. Empty input is
a single (empty) record, which hydrates to None rather than to [].
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from entity_builder.core.enums import BuildMode


def is_record_like(value: Any) -> bool:
    """True for mappings and non-string sequences."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Mapping, Sequence))


def top_level_items(data: Mapping[Any, Any] | Sequence[Any]) -> list[Any]:
    """Immediate elements of the input: mapping values or sequence items."""
    if isinstance(data, Mapping):
        return list(data.values())
    return list(data)


def detect_build_mode(data: Mapping[Any, Any] | Sequence[Any]) -> BuildMode:
    """Classify input data as one record or a collection of records."""
    items = top_level_items(data)
    if items and all(is_record_like(item) for item in items):
        return BuildMode.ARRAY_OF_ENTITIES
    return BuildMode.ONE_ENTITY
