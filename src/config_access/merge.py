"""Deep merge of two ConfigNodes."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from config_access.node import ConfigNode, ValueKind, kind_of

__all__ = ["ConfigMerger", "DeepMerger", "merge", "merge_arrays"]

logger = logging.getLogger(__name__)


class ConfigMerger(Protocol):
    """Anything able to combine an additional document into a base document."""

    def merge(self, base: ConfigNode, additional: ConfigNode) -> ConfigNode: ...


class DeepMerger:
    """ConfigMerger applying merge() with a fixed array policy."""

    def __init__(self, merge_arrays: bool = False) -> None:
        self._merge_arrays = merge_arrays

    def merge(self, base: ConfigNode, additional: ConfigNode) -> ConfigNode:
        return merge(base, additional, self._merge_arrays)


def merge(base: ConfigNode, additional: ConfigNode, merge_arrays: bool = False) -> ConfigNode:
    """Merge additional into base, modifying and returning base.

    For every key in additional:

    - absent from base: copied across.
    - a ConfigNode in both: merged recursively.
    - an array in both and merge_arrays is set: base's elements followed by
      additional's elements, duplicates kept.
    - anything else: additional's value replaces base's.

    Never raises. Not commutative. Repeating a merge is idempotent unless
    arrays are being concatenated, in which case each repeat appends again.
    """
    for key, new_value in additional.items():
        if key not in base:
            base[key] = new_value
            continue

        existing = base[key]
        existing_kind = kind_of(existing)
        new_kind = kind_of(new_value)

        if existing_kind is ValueKind.MAP and new_kind is ValueKind.MAP:
            merge(existing, new_value, merge_arrays)
        elif merge_arrays and existing_kind is ValueKind.ARRAY and new_kind is ValueKind.ARRAY:
            base[key] = _concat(existing, new_value)
        else:
            if existing_kind is not new_kind:
                logger.debug(
                    "Replacing %s value at key '%s' with %s value",
                    existing_kind.value,
                    key,
                    new_kind.value,
                )
            base[key] = new_value

    return base


def merge_arrays(a: list[Any], b: list[Any]) -> list[Any]:
    """Return a new list holding the elements of a followed by those of b."""
    return _concat(a, b)


def _concat(a: list[Any], b: list[Any]) -> list[Any]:
    return [*a, *b]
