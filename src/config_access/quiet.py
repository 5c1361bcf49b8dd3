"""Quiet access: report errors through a callback and return zero values."""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar

from config_access.errors import ConfigAccessError, TypeMismatchError
from config_access.node import ConfigNode
from config_access.options import Opts
from config_access.selector import Selector, selector_from_path_values

__all__ = [
    "ErrorHandler",
    "QuietSelector",
    "DeferredErrorQuietSelector",
    "new_deferred_error_quiet_selector",
    "quiet_selector_from_path_values",
]

_T = TypeVar("_T")

ErrorHandler = Callable[[str, ConfigAccessError], None]


class QuietSelector(Protocol):
    """Accessor that never raises for missing paths or incompatible types."""

    def path_exists(self, path: str) -> bool: ...

    def value(self, path: str) -> Any: ...

    def object_val(self, path: str, opts: Opts | None = None) -> ConfigNode | None: ...

    def string_val(self, path: str, opts: Opts | None = None) -> str: ...

    def int_val(self, path: str, opts: Opts | None = None) -> int: ...

    def float_val(self, path: str, opts: Opts | None = None) -> float: ...

    def bool_val(self, path: str, opts: Opts | None = None) -> bool: ...

    def array(self, path: str, opts: Opts | None = None) -> list[Any] | None: ...

    def string_array(self, path: str, opts: Opts | None = None) -> list[str] | None: ...

    def int_array(self, path: str, opts: Opts | None = None) -> list[int] | None: ...

    def float_array(self, path: str, opts: Opts | None = None) -> list[float] | None: ...

    def string_or_env(self, path: str, opts: Opts | None = None) -> str: ...


class DeferredErrorQuietSelector:
    """QuietSelector that passes each error to a handler instead of raising.

    On failure the handler is called with the requested path and the error,
    and the zero value for the requested type is returned ("" / 0 / 0.0 /
    False / None). A zero value is only distinguishable from a real one if the
    caller also tracks whether the handler fired.
    """

    def __init__(self, selector: Selector, handler: ErrorHandler) -> None:
        self._selector = selector
        self._handler = handler

    def _quietly(self, path: str, zero: _T, call: Callable[[], _T]) -> _T:
        try:
            return call()
        except ConfigAccessError as e:
            self._handler(path, e)
            return zero

    def path_exists(self, path: str) -> bool:
        return self._selector.path_exists(path)

    def value(self, path: str) -> Any:
        # A path descending through a leaf has no value; the handler is not called.
        try:
            return self._selector.value(path)
        except TypeMismatchError:
            return None

    def object_val(self, path: str, opts: Opts | None = None) -> ConfigNode | None:
        return self._quietly(path, None, lambda: self._selector.object_val(path, opts))

    def string_val(self, path: str, opts: Opts | None = None) -> str:
        return self._quietly(path, "", lambda: self._selector.string_val(path, opts))

    def int_val(self, path: str, opts: Opts | None = None) -> int:
        return self._quietly(path, 0, lambda: self._selector.int_val(path, opts))

    def float_val(self, path: str, opts: Opts | None = None) -> float:
        return self._quietly(path, 0.0, lambda: self._selector.float_val(path, opts))

    def bool_val(self, path: str, opts: Opts | None = None) -> bool:
        return self._quietly(path, False, lambda: self._selector.bool_val(path, opts))

    def array(self, path: str, opts: Opts | None = None) -> list[Any] | None:
        return self._quietly(path, None, lambda: self._selector.array(path, opts))

    def string_array(self, path: str, opts: Opts | None = None) -> list[str] | None:
        return self._quietly(path, None, lambda: self._selector.string_array(path, opts))

    def int_array(self, path: str, opts: Opts | None = None) -> list[int] | None:
        return self._quietly(path, None, lambda: self._selector.int_array(path, opts))

    def float_array(self, path: str, opts: Opts | None = None) -> list[float] | None:
        return self._quietly(path, None, lambda: self._selector.float_array(path, opts))

    def string_or_env(self, path: str, opts: Opts | None = None) -> str:
        return self._quietly(path, "", lambda: self._selector.string_or_env(path, opts))


def new_deferred_error_quiet_selector(selector: Selector, handler: ErrorHandler) -> QuietSelector:
    """Wrap selector so that errors are passed to handler instead of raised."""
    return DeferredErrorQuietSelector(selector, handler)


def quiet_selector_from_path_values(path_values: dict[str, Any], handler: ErrorHandler) -> QuietSelector:
    """Create a QuietSelector from a mapping of complete paths to values."""
    return DeferredErrorQuietSelector(selector_from_path_values(path_values), handler)
