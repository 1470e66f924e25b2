"""Recursive entity hydrator.

Builds typed object graphs from decoded JSON-like data:

    hydrator = Hydrator(allowed_types=[Person, Address])
    person = hydrator.build(Person, {"name": "Ann", "address": {"city": "NY"}})

Declared scalar properties are coerced, properties annotated with a class are
hydrated recursively, untyped properties receive the raw value and keys with
no declared property are set as plain attributes.
"""

from __future__ import annotations

import dataclasses
import logging
import weakref
from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from entity_builder.core.coercion import coerce_value
from entity_builder.core.config import HydratorConfig
from entity_builder.core.enums import BuildMode, PropertyKind
from entity_builder.core.exceptions import InvalidTargetType
from entity_builder.core.policy import check_target_type
from entity_builder.core.resolver import resolve_type
from entity_builder.mapping.descriptor import (
    MISSING,
    PropertyCache,
    PropertyDescriptor,
    is_pydantic_model,
)
from entity_builder.mapping.mode import detect_build_mode, top_level_items
from entity_builder.mapping.protocol import FillHook, TypeDescriber

logger = logging.getLogger(__name__)


def _instantiate(cls: type) -> Any:
    """Create an instance of ``cls`` holding only default values."""
    # Pydantic model: skip validation of required fields
    if is_pydantic_model(cls):
        return cls.model_construct()  # type: ignore[attr-defined]

    if dataclasses.is_dataclass(cls):
        fields = [f for f in dataclasses.fields(cls) if f.init]
        required = [
            f.name
            for f in fields
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        ]
        if not required:
            # InitVar pseudo-fields are not listed by fields()
            try:
                return cls()
            except TypeError as e:
                logger.debug("Building %s without __init__: %s", cls.__name__, e)
        entity = cls.__new__(cls)
        for f in dataclasses.fields(cls):
            if f.default is not dataclasses.MISSING:
                object.__setattr__(entity, f.name, f.default)
            elif f.default_factory is not dataclasses.MISSING:
                object.__setattr__(entity, f.name, f.default_factory())
        return entity

    try:
        return cls()
    except TypeError as e:
        raise InvalidTargetType(cls, f"cannot be instantiated without arguments: {e}") from e


def _assign(entity: Any, name: str, value: Any) -> bool:
    """Set a declared property, bypassing frozen or validating __setattr__.

    Returns:
        False when the instance refuses the value either way.
    """
    try:
        setattr(entity, name, value)
    except (AttributeError, TypeError, ValueError):
        try:
            object.__setattr__(entity, name, value)
        except (AttributeError, TypeError):
            return False
    return True


def _is_populated(current: Any, before: Any) -> bool:
    """True when a property holds a value other than its pre-fill default."""
    return current is not MISSING and current is not None and current is not before


class Hydrator:
    """Builds entities from mappings and sequences of mappings.

    Args:
        allowed_types: Classes (or import paths) that may be instantiated,
            together with their subclasses. Empty means unrestricted.
        allow_generic_record_only: Restrict instantiation to
            ``types.SimpleNamespace``.
        config: A prepared HydratorConfig; overrides the two arguments above.
        fill_hook: Callback run before each nested entity property is filled.
        describer: Replacement for reflective property discovery.
    """

    def __init__(
        self,
        allowed_types: Iterable[type | str] = (),
        allow_generic_record_only: bool = False,
        *,
        config: HydratorConfig | None = None,
        fill_hook: FillHook | None = None,
        describer: TypeDescriber | None = None,
    ) -> None:
        if config is None:
            config = HydratorConfig(
                allowed_types=allowed_types,
                allow_generic_record_only=allow_generic_record_only,
            )
        self.config = config
        self._fill_hook = fill_hook
        self._properties = PropertyCache(describer) if describer else PropertyCache()
        self._extras: dict[int, dict[Any, Any]] = {}

    # --- Public API ---

    def build(self, target_type: type | str, data: Mapping[str, Any] | Sequence[Any]) -> Any:
        """Build one entity or a list of entities, depending on the data shape.

        Returns:
            An entity, a list of entities, or None when nothing could be
            built (empty input or a rejected target type).
        """
        if detect_build_mode(data) is BuildMode.ARRAY_OF_ENTITIES:
            return self.build_array_of_entities(target_type, top_level_items(data))

        if not isinstance(data, Mapping):
            logger.debug("Cannot build %s from non-mapping data %r", target_type, data)
            return None
        try:
            return self.build_one_entity(target_type, data)
        except InvalidTargetType as e:
            logger.debug("Build skipped: %s", e)
            return None

    def build_one_entity(self, target_type: type | str, record: Mapping[str, Any]) -> Any:
        """Build a single entity from a record.

        Returns:
            The entity, or None when the record is empty.

        Raises:
            InvalidTargetType: If the target type is unresolvable, not
                allowed, or cannot be instantiated.
            TypeError: If ``record`` is not a mapping.
        """
        if not isinstance(record, Mapping):
            raise TypeError(f"record must be a mapping, got {type(record).__name__}")
        if not record:
            return None

        cls = check_target_type(target_type, self.config)
        entity = _instantiate(cls)
        remaining = dict(record)

        for prop in self._properties.get(cls):
            if prop.name not in remaining:
                continue
            value = remaining.pop(prop.name)
            if value is None:
                continue

            if prop.kind is PropertyKind.UNTYPED:
                self._set_declared(entity, prop.name, value)
            elif prop.kind is PropertyKind.ENTITY and prop.target_type is not None:
                self._fill_property(entity, prop.name, prop.target_type, value)
            else:
                self._set_declared(entity, prop.name, coerce_value(prop.scalar_kind, value))

        for key, value in remaining.items():
            if value is not None:
                self._assign_dynamic(entity, key, value)

        return entity

    def build_array_of_entities(
        self, target_type: type | str, records: Iterable[Mapping[str, Any]]
    ) -> list[Any]:
        """Build an entity per record, skipping records that produce nothing.

        Never raises for individual records: rejected or empty records are
        left out and the remaining entities keep their input order.
        """
        if isinstance(records, Mapping):
            records = records.values()
        pending = deque(records)
        result: list[Any] = []

        while pending:
            record = pending.popleft()
            if not isinstance(record, Mapping):
                logger.debug("Skipping non-mapping element %r", record)
                continue
            try:
                entity = self.build_one_entity(target_type, record)
            except InvalidTargetType as e:
                logger.debug("Skipping element: %s", e)
                continue
            if entity is None:
                continue
            result.append(entity)

        return result

    def register_fill_hook(self, hook: FillHook | None) -> Hydrator:
        """Install the nested-property fill hook, replacing any previous one."""
        self._fill_hook = hook
        return self

    @property
    def fill_hook(self) -> FillHook | None:
        return self._fill_hook

    def is_allowed(self, target_type: type | str) -> bool:
        """Check whether ``target_type`` would pass the allow-list."""
        try:
            check_target_type(target_type, self.config)
        except InvalidTargetType:
            return False
        return True

    def get_properties(self, target_type: type | str) -> list[PropertyDescriptor]:
        """Declared properties of ``target_type``, as used for hydration.

        Raises:
            TypeResolutionError: If the type cannot be resolved.
        """
        return list(self._properties.get(resolve_type(target_type)))

    def extra_attributes(self, entity: Any) -> dict[Any, Any]:
        """Input keys that could not be set as attributes on ``entity``."""
        return dict(self._extras.get(id(entity), {}))

    # --- Internals ---

    def _fill_property(self, entity: Any, name: str, target_type: type, value: Any) -> None:
        """Hydrate a nested entity property, giving the fill hook first go."""
        before = getattr(entity, name, MISSING)

        if self._fill_hook is not None:
            self._fill_hook(entity, name, target_type, value)

        if _is_populated(getattr(entity, name, MISSING), before):
            return

        if not isinstance(value, Mapping):
            logger.debug("Property '%s' expects a record for %s, got %r", name, target_type, value)
            return

        try:
            nested = self.build_one_entity(target_type, value)
        except InvalidTargetType as e:
            logger.debug("Property '%s' left unset: %s", name, e)
            return

        if nested is None:
            return

        self._set_declared(entity, name, nested)

    def _assign_dynamic(self, entity: Any, key: Any, value: Any) -> None:
        """Set an undeclared key, falling back to the side-channel map."""
        if isinstance(key, str):
            try:
                setattr(entity, key, value)
                return
            except (AttributeError, TypeError, ValueError):
                pass
        self._keep_extra(entity, key, value)

    def _set_declared(self, entity: Any, name: str, value: Any) -> None:
        """Set a declared property, keeping refused values in the side-channel map."""
        if not _assign(entity, name, value):
            self._keep_extra(entity, name, value)

    def _keep_extra(self, entity: Any, key: Any, value: Any) -> None:
        entity_id = id(entity)
        if entity_id not in self._extras:
            try:
                weakref.finalize(entity, self._extras.pop, entity_id, None)
            except TypeError:
                logger.debug("Dropping key %r: %s accepts no attributes", key, type(entity))
                return
            self._extras[entity_id] = {}
        logger.debug("Key %r kept as extra attribute of %s", key, type(entity).__name__)
        self._extras[entity_id][key] = value


def hydrate(
    target_type: type | str,
    data: Mapping[str, Any] | Sequence[Any],
    **options: Any,
) -> Any:
    """Build with a one-off Hydrator; ``options`` are Hydrator keyword arguments."""
    return Hydrator(**options).build(target_type, data)
