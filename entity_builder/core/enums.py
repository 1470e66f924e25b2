"""Hydration enumerations."""

from __future__ import annotations

from enum import Enum


class BuildMode(Enum):
    """Shape of the data handed to ``Hydrator.build``."""

    ONE_ENTITY = 1
    ARRAY_OF_ENTITIES = 2


class ScalarKind(Enum):
    """Scalar target kinds understood by the coercer."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    NONE = "none"


class PropertyKind(Enum):
    """How a declared property is filled."""

    SCALAR = "scalar"
    ENTITY = "entity"
    UNTYPED = "untyped"
