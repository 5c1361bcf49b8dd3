"""Selector: a stateful accessor bound to one ConfigNode."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from config_access import access
from config_access.errors import EnvVarUnsetError
from config_access.node import PATH_SEPARATOR, ConfigNode, ValueKind, kind_of
from config_access.options import DEFAULT_ENV_PREFIX, Opts

__all__ = [
    "Selector",
    "new_selector",
    "new_default_selector",
    "selector_from_path_values",
]

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_EMPTY: ConfigNode = {}


class Selector:
    """Typed access to a single ConfigNode with missing-path policy.

    The Selector holds a reference to the document, not a copy. Changes made
    to the document after the Selector is created are visible through it, and
    the document returned by ``config`` is the same object. There is no
    locking: callers sharing a document between threads must synchronise
    access themselves.

    After ``flush()`` the reference is dropped and every lookup behaves as if
    the document were empty.
    """

    def __init__(
        self,
        config: ConfigNode | None,
        error_on_missing_object_path: bool = False,
        error_on_missing_array_path: bool = False,
    ) -> None:
        self._config = config
        self._error_on_missing_object_path = error_on_missing_object_path
        self._error_on_missing_array_path = error_on_missing_array_path

    @property
    def config(self) -> ConfigNode | None:
        """The bound document, or None after flush()."""
        return self._config

    @property
    def error_on_missing_object_path(self) -> bool:
        return self._error_on_missing_object_path

    @property
    def error_on_missing_array_path(self) -> bool:
        return self._error_on_missing_array_path

    def flush(self) -> None:
        """Release the bound document."""
        self._config = None
        logger.debug("Selector flushed; all paths now resolve as missing")

    def _node(self) -> ConfigNode:
        return self._config if self._config is not None else _EMPTY

    def _lookup(
        self,
        path: str,
        opts: Opts | None,
        getter: Callable[[str, ConfigNode], _T],
    ) -> _T:
        node = self._node()
        if opts is not None and opts.on_missing is not None and access.value(path, node) is None:
            return opts.on_missing
        return getter(path, node)

    def path_exists(self, path: str) -> bool:
        return access.path_exists(path, self._node())

    def value(self, path: str) -> Any:
        return access.value(path, self._node())

    def object_val(self, path: str, opts: Opts | None = None) -> ConfigNode | None:
        return self._lookup(
            path,
            opts,
            lambda p, n: access.object_val(p, n, self._error_on_missing_object_path),
        )

    def string_val(self, path: str, opts: Opts | None = None) -> str:
        return self._lookup(path, opts, access.string_val)

    def int_val(self, path: str, opts: Opts | None = None) -> int:
        return self._lookup(path, opts, access.int_val)

    def float_val(self, path: str, opts: Opts | None = None) -> float:
        return self._lookup(path, opts, access.float_val)

    def bool_val(self, path: str, opts: Opts | None = None) -> bool:
        return self._lookup(path, opts, access.bool_val)

    def array(self, path: str, opts: Opts | None = None) -> list[Any] | None:
        return self._lookup(
            path,
            opts,
            lambda p, n: access.array(p, n, self._error_on_missing_array_path),
        )

    def string_array(self, path: str, opts: Opts | None = None) -> list[str]:
        return self._lookup(path, opts, access.string_array)

    def int_array(self, path: str, opts: Opts | None = None) -> list[int]:
        return self._lookup(path, opts, access.int_array)

    def float_array(self, path: str, opts: Opts | None = None) -> list[float]:
        return self._lookup(path, opts, access.float_array)

    def string_or_env(self, path: str, opts: Opts | None = None) -> str:
        """Return the string at path, following an environment variable indirection.

        A string starting with the configured prefix (default "$") names an
        environment variable; its value is returned instead. A string without
        the prefix is returned unchanged.

        Raises:
            EnvVarUnsetError: If the named variable is unset or empty.
        """
        opts = opts or Opts()
        node = self._node()
        if opts.on_missing is not None and access.value(path, node) is None:
            return opts.on_missing

        s = access.string_val(path, node)
        prefix = opts.env_prefix or DEFAULT_ENV_PREFIX
        if not s.startswith(prefix):
            return s

        variable = s[len(prefix) :]
        resolved = opts.lookup_env(variable)
        if not resolved:
            raise EnvVarUnsetError(path, variable)

        logger.debug("Resolved %s from environment variable %s", path, variable)
        return resolved


def new_selector(
    config: ConfigNode | None,
    error_on_missing_object_path: bool = False,
    error_on_missing_array_path: bool = False,
) -> Selector:
    """Create a Selector bound to config with the supplied missing-path policy."""
    return Selector(config, error_on_missing_object_path, error_on_missing_array_path)


def new_default_selector(config: ConfigNode | None) -> Selector:
    """Create a Selector that returns None for missing objects and arrays."""
    return Selector(config)


def selector_from_path_values(path_values: dict[str, Any]) -> Selector:
    """Create a Selector from a mapping of complete paths to values.

    Each key (e.g. ``"my.config.path"``) is exploded into nested ConfigNodes.
    Blank or whitespace-only keys, and keys with an empty segment (such as
    ``"a..b"``), are skipped since no path could reach them. When two keys conflict the later
    one wins, replacing any leaf that stood where a ConfigNode is needed.
    """
    config: ConfigNode = {}

    for full_path, v in path_values.items():
        if not full_path.strip():
            logger.warning("Skipping blank path in path values")
            continue

        segments = full_path.split(PATH_SEPARATOR)
        if not all(segments):
            logger.warning("Skipping path '%s' with an empty segment in path values", full_path)
            continue

        current = config
        for segment in segments[:-1]:
            child = current.get(segment)
            if kind_of(child) is not ValueKind.MAP:
                child = {}
                current[segment] = child
            current = child
        current[segments[-1]] = v

    return Selector(config)
