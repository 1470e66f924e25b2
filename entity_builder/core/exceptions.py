"""EntityBuilder exception hierarchy.

Only target-type rejection is surfaced to callers. Every other failure mode
degrades to "no result" inside the hydrator.
"""

from __future__ import annotations

from typing import Any


class EntityBuilderError(Exception):
    """Base exception for all EntityBuilder errors."""


# --- Target types ---


class InvalidTargetType(EntityBuilderError):
    """Raised when a target type may not be instantiated from input data."""

    def __init__(self, target_type: Any, reason: str = "not allowed") -> None:
        self.target_type = target_type
        self.reason = reason
        super().__init__(f"Invalid entity '{_type_name(target_type)}': {reason}")


class TypeResolutionError(InvalidTargetType):
    """Raised when an identifier does not resolve to a concrete class."""

    def __init__(self, target_type: Any, detail: str) -> None:
        super().__init__(target_type, f"cannot resolve type ({detail})")


# --- Configuration ---


class ConfigurationError(EntityBuilderError):
    """Raised for invalid hydrator configuration."""


def _type_name(target_type: Any) -> str:
    if isinstance(target_type, type):
        return f"{target_type.__module__}.{target_type.__qualname__}"
    return str(target_type)
