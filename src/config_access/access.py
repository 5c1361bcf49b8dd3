"""Path resolution and typed access to values in a ConfigNode."""

from __future__ import annotations

from typing import Any

from config_access.errors import MissingPathError, NilDocumentError, TypeMismatchError
from config_access.node import PATH_SEPARATOR, ConfigNode, ValueKind, kind_of

__all__ = [
    "path_exists",
    "value",
    "object_val",
    "string_val",
    "int_val",
    "float_val",
    "bool_val",
    "array",
    "string_array",
    "int_array",
    "float_array",
]


def path_exists(path: str, node: ConfigNode | None) -> bool:
    """Return True if there is a non-None value at the supplied path.

    An explicit null is indistinguishable from an absent key, and a path that
    descends through a leaf value does not exist.
    """
    try:
        return value(path, node) is not None
    except TypeMismatchError:
        return False


def value(path: str, node: ConfigNode | None) -> Any:
    """Return the value at the supplied path, or None if there is none.

    Raises:
        TypeMismatchError: If a non-final segment resolves to something other
            than a nested mapping.
    """
    if node is None:
        return None
    return _resolve(path.split(PATH_SEPARATOR), node, path, 0)


def _resolve(segments: list[str], node: ConfigNode, path: str, depth: int) -> Any:
    key = segments[depth]
    if not key:
        return None

    result = node.get(key)
    if result is None:
        return None

    if depth == len(segments) - 1:
        return result

    if kind_of(result) is not ValueKind.MAP:
        prefix = PATH_SEPARATOR.join(segments[: depth + 1])
        raise TypeMismatchError(
            path,
            "a ConfigNode",
            result,
            message=f"Cannot resolve {path}: value at {prefix} is {result!r} and is not a ConfigNode",
        )

    return _resolve(segments, result, path, depth + 1)


def _require(path: str, node: ConfigNode | None, message: str | None = None) -> Any:
    if node is None:
        raise NilDocumentError(path)

    v = value(path, node)
    if v is None:
        raise MissingPathError(path, message=message or f"No such path {path}")
    return v


def object_val(path: str, node: ConfigNode | None, err_if_missing: bool = False) -> ConfigNode | None:
    """Return the nested mapping at the supplied path.

    Returns None when the path does not exist, unless err_if_missing is set.
    Strings, numbers, bools and arrays are rejected with a TypeMismatchError.
    """
    if node is None:
        raise NilDocumentError(path)

    v = value(path, node)
    if v is None:
        if err_if_missing:
            raise MissingPathError(path, message=f"No such path {path}")
        return None

    if kind_of(v) is ValueKind.MAP:
        return v

    raise TypeMismatchError(path, "a ConfigNode", v)


def string_val(path: str, node: ConfigNode | None) -> str:
    """Return the string at the supplied path. Other types are not converted."""
    v = _require(path, node, f"No string value found at {path}")
    if kind_of(v) is ValueKind.STRING:
        return v
    raise TypeMismatchError(path, "a string", v)


def int_val(path: str, node: ConfigNode | None) -> int:
    """Return the number at the supplied path as an int.

    Fractional numbers are truncated toward zero without error: decoded
    documents hold a single numeric representation, so data may be lost if the
    number is not actually integral.
    """
    v = _require(path, node)
    if kind_of(v) is ValueKind.NUMBER:
        return int(v)
    raise TypeMismatchError(path, "an int", v)


def float_val(path: str, node: ConfigNode | None) -> float:
    """Return the number at the supplied path as a float."""
    v = _require(path, node)
    if kind_of(v) is ValueKind.NUMBER:
        return float(v)
    raise TypeMismatchError(path, "a float", v)


def bool_val(path: str, node: ConfigNode | None) -> bool:
    """Return the bool at the supplied path.

    Only the literals true and false are accepted; numeric or string truthiness
    is not.
    """
    v = _require(path, node)
    if kind_of(v) is ValueKind.BOOL:
        return v
    raise TypeMismatchError(path, "a bool", v)


def array(path: str, node: ConfigNode | None, err_if_missing: bool = False) -> list[Any] | None:
    """Return the list at the supplied path.

    Returns None when the path does not exist, unless err_if_missing is set.
    """
    if node is None:
        raise NilDocumentError(path)

    v = value(path, node)
    if v is None:
        if err_if_missing:
            raise MissingPathError(path, message=f"No such path {path}")
        return None

    if kind_of(v) is ValueKind.ARRAY:
        return v

    raise TypeMismatchError(path, "an array", v)


def string_array(path: str, node: ConfigNode | None) -> list[str]:
    """Return the list of strings at the supplied path."""
    result: list[str] = []
    for i, v in enumerate(array(path, node, True)):
        if kind_of(v) is not ValueKind.STRING:
            raise TypeMismatchError(path, "a string", v, index=i)
        result.append(v)
    return result


def int_array(path: str, node: ConfigNode | None) -> list[int]:
    """Return the list of numbers at the supplied path, each truncated to an int."""
    result: list[int] = []
    for i, v in enumerate(array(path, node, True)):
        if kind_of(v) is not ValueKind.NUMBER:
            raise TypeMismatchError(path, "an int", v, index=i)
        result.append(int(v))
    return result


def float_array(path: str, node: ConfigNode | None) -> list[float]:
    """Return the list of numbers at the supplied path as floats."""
    result: list[float] = []
    for i, v in enumerate(array(path, node, True)):
        if kind_of(v) is not ValueKind.NUMBER:
            raise TypeMismatchError(path, "a float", v, index=i)
        result.append(float(v))
    return result
