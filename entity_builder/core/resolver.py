"""Target type resolution.

Target types are given either as classes or as import paths:

    "myapp.entities.Person"   -> myapp.entities.Person
    "myapp.entities:Person"   -> myapp.entities.Person
    "stdClass"                -> types.SimpleNamespace
"""

from __future__ import annotations

import importlib
import inspect
from functools import lru_cache
from types import SimpleNamespace
from typing import Any

from entity_builder.core.exceptions import TypeResolutionError

GENERIC_RECORD_TYPE: type = SimpleNamespace

_GENERIC_RECORD_ALIASES = frozenset({"stdClass", "SimpleNamespace", "types.SimpleNamespace"})


def load_type(identifier: Any) -> type:
    """Load a class or import path without checking that it is instantiable."""
    if isinstance(identifier, str):
        return _import_type(identifier)
    if isinstance(identifier, type):
        return identifier
    raise TypeResolutionError(
        identifier, f"expected a class or import path, got {type(identifier).__name__}"
    )


def resolve_type(identifier: Any) -> type:
    """Resolve a class or import path to a concrete, instantiable class.

    Raises:
        TypeResolutionError: If the identifier is not a class, cannot be
            imported, or names an abstract class.
    """
    cls = load_type(identifier)
    if inspect.isabstract(cls):
        raise TypeResolutionError(identifier, "abstract class")
    return cls


def is_resolvable(identifier: Any) -> bool:
    """Check whether ``resolve_type`` would succeed."""
    try:
        resolve_type(identifier)
    except TypeResolutionError:
        return False
    return True


@lru_cache(maxsize=512)
def _import_type(path: str) -> type:
    """Import a class by dotted or colon-separated path."""
    path = path.strip()
    if path in _GENERIC_RECORD_ALIASES:
        return GENERIC_RECORD_TYPE

    if ":" in path:
        module_path, _, attr_path = path.partition(":")
    else:
        module_path, _, attr_path = path.rpartition(".")
    if not module_path or not attr_path:
        raise TypeResolutionError(path, "not a qualified import path")

    try:
        obj: Any = importlib.import_module(module_path)
    except ImportError as e:
        raise TypeResolutionError(path, f"module '{module_path}' not importable: {e}") from e

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise TypeResolutionError(path, f"'{part}' not found in '{module_path}'") from None

    if not isinstance(obj, type):
        raise TypeResolutionError(path, "not a class")
    return obj
