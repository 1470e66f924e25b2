"""Property descriptors and type introspection.

A target class is described once as an ordered list of PropertyDescriptor
entries. Descriptors are discovered from (in order):

1. Pydantic ``model_fields``
2. dataclass fields
3. class annotations (base classes first)
4. public, non-callable class attributes without annotations (untyped)
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import types
import typing
from collections.abc import Callable, Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel

from entity_builder.core.enums import PropertyKind, ScalarKind

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

_SCALAR_TYPES: dict[type, ScalarKind] = {
    bool: ScalarKind.BOOL,
    int: ScalarKind.INT,
    float: ScalarKind.FLOAT,
    str: ScalarKind.STRING,
}


@dataclass(frozen=True)
class PropertyDescriptor:
    """A declared property of a target class."""

    name: str
    kind: PropertyKind
    scalar_kind: ScalarKind | None = None
    target_type: type | None = None
    default: Any = MISSING

    @property
    def type_name(self) -> str | None:
        """Declared type tag: scalar kind value, class name, or None when untyped."""
        if self.kind is PropertyKind.SCALAR and self.scalar_kind is not None:
            return self.scalar_kind.value
        if self.kind is PropertyKind.ENTITY and self.target_type is not None:
            return self.target_type.__qualname__
        return None

    @classmethod
    def untyped(cls, name: str, default: Any = MISSING) -> PropertyDescriptor:
        return cls(name=name, kind=PropertyKind.UNTYPED, default=default)

    @classmethod
    def from_annotation(
        cls, name: str, annotation: Any, default: Any = MISSING
    ) -> PropertyDescriptor:
        """Build a descriptor from a resolved type annotation."""
        kind, scalar_kind, target_type = classify_annotation(annotation)
        return cls(
            name=name,
            kind=kind,
            scalar_kind=scalar_kind,
            target_type=target_type,
            default=default,
        )


def classify_annotation(annotation: Any) -> tuple[PropertyKind, ScalarKind | None, type | None]:
    """Map a type annotation to (kind, scalar kind, nested entity class).

    ``X | None`` is read as ``X``. Parameterised containers map to the array
    kind. Any other union or typing construct is untyped.
    """
    if annotation is MISSING or annotation is Any:
        return PropertyKind.UNTYPED, None, None
    if annotation is None or annotation is type(None):
        return PropertyKind.SCALAR, ScalarKind.NONE, None

    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return classify_annotation(typing.get_args(annotation)[0])
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return classify_annotation(members[0])
        return PropertyKind.UNTYPED, None, None
    if origin is not None:
        annotation = origin

    if not isinstance(annotation, type):
        return PropertyKind.UNTYPED, None, None

    scalar_kind = _SCALAR_TYPES.get(annotation)
    if scalar_kind is not None:
        return PropertyKind.SCALAR, scalar_kind, None
    if issubclass(annotation, (str, bytes, bytearray)):
        return PropertyKind.UNTYPED, None, None
    if issubclass(annotation, (Sequence, Mapping, Set)):
        return PropertyKind.SCALAR, ScalarKind.ARRAY, None
    return PropertyKind.ENTITY, None, annotation


def describe_type(cls: type) -> list[PropertyDescriptor]:
    """Enumerate the declared properties of ``cls``.

    Raises whatever introspection raises (e.g. NameError for unresolvable
    forward references); PropertyCache turns failures into an empty list.
    """
    if is_pydantic_model(cls):
        return _describe_pydantic(cls)

    hints = typing.get_type_hints(cls)
    descriptors: dict[str, PropertyDescriptor] = {}

    if dataclasses.is_dataclass(cls):
        for f in dataclasses.fields(cls):
            default = f.default if f.default is not dataclasses.MISSING else MISSING
            descriptors[f.name] = PropertyDescriptor.from_annotation(
                f.name, hints.get(f.name, MISSING), default
            )

    for name, annotation in hints.items():
        if name in descriptors or name.startswith("_") or _is_pseudo_field(annotation):
            continue
        descriptors[name] = PropertyDescriptor.from_annotation(
            name, annotation, getattr(cls, name, MISSING)
        )

    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for name, value in vars(klass).items():
            if name in descriptors or name in hints or not _is_plain_attribute(name, value):
                continue
            descriptors[name] = PropertyDescriptor.untyped(name, value)

    return list(descriptors.values())


def _describe_pydantic(cls: type) -> list[PropertyDescriptor]:
    descriptors = []
    for name, field_info in cls.model_fields.items():  # type: ignore[attr-defined]
        default = MISSING if field_info.is_required() else field_info.default
        descriptors.append(PropertyDescriptor.from_annotation(name, field_info.annotation, default))
    return descriptors


def is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def _is_pseudo_field(annotation: Any) -> bool:
    """ClassVar and InitVar annotations declare no instance property."""
    if annotation is ClassVar or typing.get_origin(annotation) is ClassVar:
        return True
    return annotation is dataclasses.InitVar or isinstance(annotation, dataclasses.InitVar)


def _is_plain_attribute(name: str, value: Any) -> bool:
    if name.startswith("_"):
        return False
    if isinstance(value, (property, classmethod, staticmethod, types.MemberDescriptorType)):
        return False
    return not callable(value)


class PropertyCache:
    """Write-once cache of property descriptors, keyed by class.

    Entries are computed on first use and never evicted. Population is
    serialized by a lock so a single cache can be shared between threads.

    Args:
        describer: Callable returning the descriptors of a class.
    """

    def __init__(
        self, describer: Callable[[type], Sequence[PropertyDescriptor]] = describe_type
    ) -> None:
        self._describer = describer
        self._entries: dict[type, tuple[PropertyDescriptor, ...]] = {}
        self._lock = threading.Lock()

    def get(self, cls: type) -> tuple[PropertyDescriptor, ...]:
        """Return the descriptors of ``cls``, describing it on first use."""
        entry = self._entries.get(cls)
        if entry is not None:
            return entry

        with self._lock:
            entry = self._entries.get(cls)
            if entry is None:
                entry = self._describe(cls)
                self._entries[cls] = entry
        return entry

    def _describe(self, cls: type) -> tuple[PropertyDescriptor, ...]:
        try:
            return tuple(self._describer(cls))
        except Exception as e:  # noqa: BLE001
            logger.debug("Introspection of %s failed, no properties will be filled: %s", cls, e)
            return ()

    def __contains__(self, cls: object) -> bool:
        return cls in self._entries

    def __len__(self) -> int:
        """Number of described classes."""
        return len(self._entries)
