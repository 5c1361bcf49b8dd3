"""Populate dataclass and pydantic records from a config subtree."""

from __future__ import annotations

import collections.abc
import dataclasses
import json
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from config_access import access
from config_access.errors import (
    MissingPathError,
    NilDocumentError,
    TypeMismatchError,
    UnserializableValueError,
    UnsupportedFieldShapeError,
)
from config_access.node import PATH_SEPARATOR, ConfigNode, ValueKind, kind_of

__all__ = ["populate", "populate_from_root", "set_field"]

logger = logging.getLogger(__name__)

_ROOT_KEY = "root"

_SCALARS: dict[type, tuple[ValueKind, str]] = {
    str: (ValueKind.STRING, "a string"),
    bool: (ValueKind.BOOL, "a bool"),
    int: (ValueKind.NUMBER, "an int"),
    float: (ValueKind.NUMBER, "a float"),
}

_MAP_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)
_LIST_ORIGINS = (list, tuple, set, frozenset, collections.abc.Sequence)


@dataclass(frozen=True)
class _FieldDescriptor:
    """A declared field of a target record."""

    name: str
    key: str
    annotation: Any


def populate(path: str, target: Any, node: ConfigNode | None) -> None:
    """Set the fields of target from the ConfigNode at path.

    target is a dataclass instance or a pydantic model instance. The subtree
    is serialized to JSON and decoded again before conversion, so target never
    shares mutable state with the document. Every field is converted before
    any is assigned: on error target is left unchanged.

    Raises:
        MissingPathError: If there is no value at path.
        TypeMismatchError: If the value at path is not a ConfigNode or a
            field value cannot be converted to the field's declared type.
        UnserializableValueError: If the subtree holds a value that is not a
            plain config value.
        UnsupportedFieldShapeError: If the document supplies a value for a
            field whose declared type cannot be populated.
    """
    if node is None:
        raise NilDocumentError(path)
    if not access.path_exists(path, node):
        raise MissingPathError(path)

    subtree = _detach(path, access.object_val(path, node))

    updates: dict[str, Any] = {}
    for descriptor in _field_descriptors(target):
        v = subtree.get(descriptor.key)
        if v is None:
            continue
        field_path = f"{path}{PATH_SEPARATOR}{descriptor.key}"
        updates[descriptor.name] = _convert(field_path, descriptor, v)

    for name, converted in updates.items():
        setattr(target, name, converted)

    logger.debug("Populated %d field(s) of %s from %s", len(updates), type(target).__name__, path)


def populate_from_root(target: Any, node: ConfigNode | None) -> None:
    """Set the fields of target using the whole of the supplied document."""
    if node is None:
        raise NilDocumentError(_ROOT_KEY)
    populate(_ROOT_KEY, target, {_ROOT_KEY: node})


def set_field(field_name: str, path: str, target: Any, node: ConfigNode | None) -> None:
    """Set a single named field of target from the value at path."""
    if node is None:
        raise NilDocumentError(path)
    if not access.path_exists(path, node):
        raise MissingPathError(path)

    for descriptor in _field_descriptors(target):
        if descriptor.name == field_name:
            break
    else:
        raise ValueError(f"{type(target).__name__} has no field '{field_name}'")

    v = _detach(path, access.value(path, node))
    setattr(target, field_name, _convert(path, descriptor, v))


def _field_descriptors(target: Any) -> list[_FieldDescriptor]:
    cls = type(target)

    if isinstance(target, BaseModel):
        return [
            _FieldDescriptor(name=name, key=info.alias or name, annotation=info.annotation)
            for name, info in cls.model_fields.items()
        ]

    if dataclasses.is_dataclass(target) and not isinstance(target, type):
        try:
            hints = typing.get_type_hints(cls)
        except NameError as e:
            raise TypeError(f"Cannot populate {cls.__name__}: unable to resolve field annotations ({e})") from e
        return [
            _FieldDescriptor(name=f.name, key=f.name, annotation=hints.get(f.name, f.type))
            for f in dataclasses.fields(target)
        ]

    raise TypeError(f"Cannot populate {cls.__name__}: target must be a dataclass or pydantic model instance")


def _detach(path: str, v: Any) -> Any:
    try:
        encoded = json.dumps(v)
    except (TypeError, ValueError) as e:
        raise UnserializableValueError(path, str(e), cause=e) from e
    return json.loads(encoded)


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _convert(path: str, descriptor: _FieldDescriptor, v: Any) -> Any:
    annotation = _unwrap_optional(descriptor.annotation)
    origin = get_origin(annotation) or annotation

    if isinstance(annotation, type) and annotation in _SCALARS:
        expected_kind, expected = _SCALARS[annotation]
        if kind_of(v) is not expected_kind:
            raise TypeMismatchError(path, expected, v)
        if annotation is int:
            return int(v)
        if annotation is float:
            return float(v)
        return v

    if origin in _MAP_ORIGINS:
        return _convert_map(path, annotation, v)

    if origin in _LIST_ORIGINS:
        if kind_of(v) is not ValueKind.ARRAY:
            raise TypeMismatchError(path, "an array", v)
        return _validate(path, annotation, v, from_json=True)

    if _is_record(annotation):
        if kind_of(v) is not ValueKind.MAP:
            raise TypeMismatchError(path, "a ConfigNode", v)
        return _validate(path, annotation, v, from_json=True)

    raise UnsupportedFieldShapeError(path, descriptor.name, descriptor.annotation)


def _is_record(annotation: Any) -> bool:
    if not isinstance(annotation, type):
        return False
    return dataclasses.is_dataclass(annotation) or issubclass(annotation, BaseModel)


def _convert_map(path: str, annotation: Any, v: Any) -> Any:
    if kind_of(v) is not ValueKind.MAP:
        raise TypeMismatchError(path, "a ConfigNode", v)

    contents: dict[str, Any] = {}
    for key, item in v.items():
        if kind_of(item) is ValueKind.ARRAY:
            item = _map_array_value(f"{path}{PATH_SEPARATOR}{key}", item)
        contents[key] = item

    return _validate(path, annotation, contents, from_json=False)


def _map_array_value(path: str, items: list[Any]) -> list[str]:
    # Only non-empty string arrays keep enough type information to be used as
    # map values.
    if not items:
        raise TypeMismatchError(
            path, "a map value", items, message=f"Cannot use an empty array as a value in a map ({path})"
        )

    for i, item in enumerate(items):
        if kind_of(item) is not ValueKind.STRING:
            raise TypeMismatchError(
                path,
                "a map value",
                item,
                index=i,
                message=f"Cannot use an array of {type(item).__name__} as a value in a map ({path}[{i}])",
            )
    return list(items)


def _validate(path: str, annotation: Any, v: Any, from_json: bool) -> Any:
    adapter: TypeAdapter[Any] = TypeAdapter(annotation)
    try:
        if from_json:
            return adapter.validate_json(json.dumps(v), strict=True)
        return adapter.validate_python(v, strict=True)
    except ValidationError as e:
        raise TypeMismatchError(
            path,
            repr(annotation),
            v,
            message=f"Value at {path} cannot be converted to {annotation!r}: {e.error_count()} error(s)",
            cause=e,
        ) from e
