"""Unit tests for HydratorConfig."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from entity_builder.core.config import HydratorConfig
from entity_builder.core.exceptions import ConfigurationError


class A:
    pass


class B:
    pass


class TestHydratorConfig:
    def test_defaults(self) -> None:
        config = HydratorConfig()
        assert config.allowed_types == []
        assert config.allow_generic_record_only is False
        assert config.restricted is False

    def test_accepts_classes_and_paths(self) -> None:
        config = HydratorConfig(allowed_types=[A, "decimal.Decimal"])
        assert config.allowed_types == [A, "decimal.Decimal"]
        assert config.restricted is True

    def test_deduplicates_preserving_order(self) -> None:
        config = HydratorConfig(allowed_types=[B, A, B, A])
        assert config.allowed_types == [B, A]

    def test_accepts_any_iterable(self) -> None:
        config = HydratorConfig(allowed_types=(t for t in (A, B)))
        assert config.allowed_types == [A, B]

    def test_single_entry_is_wrapped(self) -> None:
        assert HydratorConfig(allowed_types=A).allowed_types == [A]
        assert HydratorConfig(allowed_types="decimal.Decimal").allowed_types == ["decimal.Decimal"]

    def test_none_means_unrestricted(self) -> None:
        assert HydratorConfig(allowed_types=None).allowed_types == []

    def test_rejects_invalid_entry(self) -> None:
        with pytest.raises(ConfigurationError, match="classes or import paths"):
            HydratorConfig(allowed_types=[A, 42])

    def test_rejects_non_iterable(self) -> None:
        with pytest.raises(ConfigurationError):
            HydratorConfig(allowed_types=42)

    def test_frozen(self) -> None:
        config = HydratorConfig()
        with pytest.raises(ValidationError):
            config.allow_generic_record_only = True  # type: ignore[misc]
