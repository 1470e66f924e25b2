"""Mapping layer - turn records into typed entities."""

from __future__ import annotations

from entity_builder.mapping.descriptor import PropertyCache, PropertyDescriptor, describe_type
from entity_builder.mapping.hydrator import Hydrator, hydrate
from entity_builder.mapping.mode import detect_build_mode
from entity_builder.mapping.protocol import FillHook, TypeDescriber

__all__ = [
    "Hydrator",
    "hydrate",
    "detect_build_mode",
    "PropertyDescriptor",
    "PropertyCache",
    "describe_type",
    "FillHook",
    "TypeDescriber",
]
