"""Hydrator extension protocols.

A FillHook runs before a nested entity property is filled by recursion and
may assign the property itself. A TypeDescriber replaces the default
reflective property discovery, e.g. with a static descriptor table.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from entity_builder.mapping.descriptor import PropertyDescriptor


class FillHook(Protocol):
    """Callback invoked for each nested entity property about to be filled."""

    def __call__(self, entity: Any, property_name: str, target_type: type, value: Any) -> None:
        """Optionally assign ``entity.<property_name>`` from ``value``."""
        ...


class TypeDescriber(Protocol):
    """Enumerates the declared properties of a class."""

    def __call__(self, cls: type) -> Sequence[PropertyDescriptor]:
        """Return the properties of ``cls`` in declaration order."""
        ...
