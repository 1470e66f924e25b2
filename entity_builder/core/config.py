"""Hydrator configuration.

HydratorConfig is a Pydantic model holding the allow-list policy. Entries are
kept as given (classes or import paths) and resolved when consulted, so an
entry that cannot be imported simply never matches.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from entity_builder.core.exceptions import ConfigurationError


class HydratorConfig(BaseModel):
    """Allow-list configuration for a Hydrator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    allowed_types: list[Any] = []
    allow_generic_record_only: bool = False

    @field_validator("allowed_types", mode="before")
    @classmethod
    def _check_allowed_types(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, (str, type)):
            value = [value]
        try:
            entries = list(value)
        except TypeError:
            raise ConfigurationError(
                f"allowed_types must be an iterable of classes or import paths, got {value!r}"
            ) from None

        # Ordered set: first occurrence wins
        unique: list[Any] = []
        for entry in entries:
            if not isinstance(entry, (str, type)):
                raise ConfigurationError(
                    f"allowed_types entries must be classes or import paths, got {entry!r}"
                )
            if entry not in unique:
                unique.append(entry)
        return unique

    @property
    def restricted(self) -> bool:
        """True when an allow-list is configured."""
        return bool(self.allowed_types)
