"""Scalar type coercion.

Permissive, cast-style conversion of raw input values to the scalar kinds a
property can declare. Coercion never raises: values that cannot be read as
the target kind fall back to that kind's zero value.

    "30"    -> int    -> 30
    "12abc" -> int    -> 12
    "abc"   -> float  -> 0.0
    "0"     -> bool   -> False
    "x"     -> array  -> ["x"]
    1.0     -> string -> "1"
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from entity_builder.core.enums import ScalarKind

# Leading numeric prefix, as read by a C-style cast ("  12.5e1xyz" -> "12.5e1")
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_INTEGER_LITERAL = re.compile(r"^[+-]?\d+$")

# Strings that read as false besides the empty string
_FALSE_STRINGS = frozenset({"0"})


def coerce_value(kind: ScalarKind | str, value: Any) -> Any:
    """Coerce ``value`` to the scalar ``kind``.

    Args:
        kind: A ``ScalarKind`` or its string value ("bool", "int", ...).
            Unknown kinds pass the value through unchanged.
        value: Any raw value.

    Returns:
        The coerced value. Already-correct values are returned unchanged.
    """
    try:
        kind = ScalarKind(kind)
    except ValueError:
        return value

    if kind is ScalarKind.BOOL:
        return to_bool(value)
    if kind is ScalarKind.INT:
        return to_int(value)
    if kind is ScalarKind.FLOAT:
        return to_float(value)
    if kind is ScalarKind.ARRAY:
        return to_array(value)
    if kind is ScalarKind.STRING:
        return to_string(value)
    return value


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value not in _FALSE_STRINGS and value != ""
    try:
        return bool(value)
    except Exception:  # noqa: BLE001 - __bool__ may raise anything
        return True


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if value is None:
        return 0
    if isinstance(value, float):
        return _float_to_int(value)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        prefix = _numeric_prefix(value)
        if prefix is None:
            return 0
        if _INTEGER_LITERAL.match(prefix):
            return int(prefix)
        return _float_to_int(float(prefix))
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return 1 if value else 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 1


def to_float(value: Any) -> float:
    if isinstance(value, float):
        return value
    if isinstance(value, bool):
        return float(value)
    if value is None:
        return 0.0
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.copysign(math.inf, value)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        prefix = _numeric_prefix(value)
        return float(prefix) if prefix is not None else 0.0
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return 1.0 if value else 0.0
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return 1.0


def to_array(value: Any) -> list[Any] | dict[Any, Any]:
    """Wrap a single value in a list; lists and dicts pass through."""
    if isinstance(value, (list, dict)):
        return value
    if value is None:
        return []
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (tuple, set, frozenset)):
        return list(value)
    return [value]


def to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:  # noqa: BLE001 - __str__ may raise anything
        return ""


def _numeric_prefix(text: str) -> str | None:
    match = _NUMERIC_PREFIX.match(text)
    return match.group(1) if match else None


def _float_to_int(value: float) -> int:
    if math.isnan(value) or math.isinf(value):
        return 0
    return int(value)
