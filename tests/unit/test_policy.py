"""Unit tests for type resolution and the allow-list policy."""

from __future__ import annotations

import abc
from decimal import Decimal
from types import SimpleNamespace

import pytest

from entity_builder.core.config import HydratorConfig
from entity_builder.core.exceptions import InvalidTargetType, TypeResolutionError
from entity_builder.core.policy import allowed_classes, check_target_type, is_allowed_type
from entity_builder.core.resolver import GENERIC_RECORD_TYPE, load_type, resolve_type


class Entity:
    pass


class User(Entity):
    pass


class Admin(User):
    pass


class Unrelated:
    pass


class AbstractEntity(abc.ABC):
    @abc.abstractmethod
    def key(self) -> str: ...


class TestResolveType:
    def test_class_passes_through(self) -> None:
        assert resolve_type(User) is User

    def test_dotted_path(self) -> None:
        assert resolve_type("decimal.Decimal") is Decimal

    def test_colon_path(self) -> None:
        assert resolve_type("decimal:Decimal") is Decimal

    def test_nested_attribute_path(self) -> None:
        assert resolve_type(f"{__name__}:{User.__qualname__}") is User

    @pytest.mark.parametrize("alias", ["stdClass", "SimpleNamespace", "types.SimpleNamespace"])
    def test_generic_record_aliases(self, alias: str) -> None:
        assert resolve_type(alias) is SimpleNamespace
        assert GENERIC_RECORD_TYPE is SimpleNamespace

    @pytest.mark.parametrize(
        "identifier",
        ["Nope", "no_such_module_xyz.Thing", "decimal.NoSuchThing", "decimal.getcontext", 42],
    )
    def test_unresolvable(self, identifier: object) -> None:
        with pytest.raises(TypeResolutionError):
            resolve_type(identifier)

    def test_resolution_error_is_invalid_target_type(self) -> None:
        with pytest.raises(InvalidTargetType, match="cannot resolve type"):
            resolve_type("no_such_module_xyz.Thing")

    def test_abstract_class_rejected(self) -> None:
        with pytest.raises(TypeResolutionError, match="abstract"):
            resolve_type(AbstractEntity)

    def test_load_type_accepts_abstract_class(self) -> None:
        assert load_type(AbstractEntity) is AbstractEntity


class TestAllowListPolicy:
    def test_unrestricted_accepts_anything(self) -> None:
        config = HydratorConfig()
        assert is_allowed_type(Unrelated, config) is True
        assert is_allowed_type(SimpleNamespace, config) is True

    def test_listed_type_accepted(self) -> None:
        config = HydratorConfig(allowed_types=[User])
        assert is_allowed_type(User, config) is True

    def test_subclass_of_listed_type_accepted(self) -> None:
        config = HydratorConfig(allowed_types=[Entity])
        assert is_allowed_type(Admin, config) is True

    def test_superclass_of_listed_type_rejected(self) -> None:
        config = HydratorConfig(allowed_types=[User])
        assert is_allowed_type(Entity, config) is False

    def test_unlisted_type_rejected(self) -> None:
        config = HydratorConfig(allowed_types=[User])
        assert is_allowed_type(Unrelated, config) is False

    def test_listed_by_import_path(self) -> None:
        config = HydratorConfig(allowed_types=[f"{__name__}.User"])
        assert is_allowed_type(Admin, config) is True

    def test_abstract_base_may_be_listed(self) -> None:
        class Concrete(AbstractEntity):
            def key(self) -> str:
                return "k"

        config = HydratorConfig(allowed_types=[AbstractEntity])
        assert is_allowed_type(Concrete, config) is True

    def test_unresolvable_entry_never_matches(self) -> None:
        config = HydratorConfig(allowed_types=["no_such_module_xyz.Thing", User])
        assert allowed_classes(config) == [User]
        assert is_allowed_type(User, config) is True
        assert is_allowed_type(Unrelated, config) is False

    def test_generic_only_accepts_generic_record(self) -> None:
        config = HydratorConfig(allow_generic_record_only=True)
        assert is_allowed_type(SimpleNamespace, config) is True
        assert is_allowed_type(User, config) is False

    def test_generic_only_overrides_listed_types(self) -> None:
        config = HydratorConfig(allowed_types=[User], allow_generic_record_only=True)
        assert is_allowed_type(User, config) is False
        assert is_allowed_type(Admin, config) is False

    def test_generic_only_bypasses_allow_list_for_generic_record(self) -> None:
        config = HydratorConfig(allowed_types=[User], allow_generic_record_only=True)
        assert is_allowed_type(SimpleNamespace, config) is True


class TestCheckTargetType:
    def test_returns_resolved_class(self) -> None:
        assert check_target_type(f"{__name__}.Admin", HydratorConfig()) is Admin

    def test_rejected_type_raises(self) -> None:
        config = HydratorConfig(allowed_types=[User])
        with pytest.raises(InvalidTargetType) as exc_info:
            check_target_type(Unrelated, config)
        assert exc_info.value.target_type is Unrelated
        assert "Unrelated" in str(exc_info.value)

    def test_unresolvable_raises(self) -> None:
        with pytest.raises(TypeResolutionError):
            check_target_type("no_such_module_xyz.Thing", HydratorConfig())
