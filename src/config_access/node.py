"""ConfigNode type definitions and value shape detection."""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = ["ConfigNode", "PATH_SEPARATOR", "ValueKind", "kind_of"]

PATH_SEPARATOR = "."

ConfigNode = dict[str, Any]


class ValueKind(str, Enum):
    """The closed set of value shapes a ConfigNode may hold."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    ARRAY = "array"
    MAP = "map"
    NULL = "null"
    UNKNOWN = "unknown"


def kind_of(value: Any) -> ValueKind:
    """Return the shape of a config value.

    bool is checked before the numeric types because it is a subclass of int
    and must never be treated as a number.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, dict):
        return ValueKind.MAP
    if isinstance(value, list):
        return ValueKind.ARRAY
    return ValueKind.UNKNOWN
