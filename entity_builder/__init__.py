"""EntityBuilder - hydrate typed object graphs from JSON-like data."""

from __future__ import annotations

import logging

from entity_builder.core.coercion import coerce_value
from entity_builder.core.config import HydratorConfig
from entity_builder.core.enums import BuildMode, PropertyKind, ScalarKind
from entity_builder.core.exceptions import (
    ConfigurationError,
    EntityBuilderError,
    InvalidTargetType,
    TypeResolutionError,
)
from entity_builder.core.resolver import GENERIC_RECORD_TYPE, resolve_type
from entity_builder.mapping.descriptor import PropertyCache, PropertyDescriptor, describe_type
from entity_builder.mapping.hydrator import Hydrator, hydrate
from entity_builder.mapping.mode import detect_build_mode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Hydration
    "Hydrator",
    "hydrate",
    "detect_build_mode",
    # Configuration
    "HydratorConfig",
    # Introspection
    "PropertyDescriptor",
    "PropertyCache",
    "describe_type",
    "resolve_type",
    "GENERIC_RECORD_TYPE",
    # Coercion
    "coerce_value",
    # Enums
    "BuildMode",
    "ScalarKind",
    "PropertyKind",
    # Exceptions
    "EntityBuilderError",
    "InvalidTargetType",
    "TypeResolutionError",
    "ConfigurationError",
]
