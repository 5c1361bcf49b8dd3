"""Error hierarchy for config-access."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "ConfigAccessError",
    "MissingPathError",
    "TypeMismatchError",
    "NilDocumentError",
    "UnsupportedFieldShapeError",
    "UnserializableValueError",
    "EnvVarUnsetError",
    "ErrorCodes",
]


class ConfigAccessError(Exception):
    """Base error for all config-access errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    @property
    def path(self) -> str | None:
        """The config path the error relates to, if any."""
        return self.details.get("path")


class MissingPathError(ConfigAccessError):
    """Raised when there is no value at the requested config path.

    Kept distinct from TypeMismatchError so callers can tell "absent" apart
    from "present but the wrong shape".
    """

    def __init__(self, path: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_PATH_MISSING",
            message=message or f"No value found at {path}",
            details={"path": path},
            **kwargs,
        )


class TypeMismatchError(ConfigAccessError):
    """Raised when the value at a path cannot be converted to the requested shape."""

    def __init__(
        self,
        path: str,
        expected: str,
        actual: Any = None,
        index: int | None = None,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        location = path if index is None else f"{path}[{index}]"
        details: dict[str, Any] = {
            "path": path,
            "expected": expected,
            "actual_type": type(actual).__name__,
        }
        if index is not None:
            details["index"] = index
        super().__init__(
            code="CONFIG_TYPE_MISMATCH",
            message=message or f"Value at {location} is {actual!r} and cannot be converted to {expected}",
            details=details,
            **kwargs,
        )

    @property
    def expected(self) -> str:
        """Name of the shape that was requested."""
        return self.details["expected"]

    @property
    def index(self) -> int | None:
        """Index of the offending element for typed array conversions."""
        return self.details.get("index")


class NilDocumentError(ConfigAccessError):
    """Raised when an accessor is called without a document."""

    def __init__(self, path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NIL_DOCUMENT",
            message=f"Supplied ConfigNode is None (requested path {path})",
            details={"path": path},
            **kwargs,
        )


class UnsupportedFieldShapeError(ConfigAccessError):
    """Raised when a target record declares a field type that cannot be populated."""

    def __init__(self, path: str, field_name: str, field_type: Any, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_UNSUPPORTED_FIELD",
            message=(
                f"Unable to use value at path {path} as target field {field_name} "
                f"is not a supported type ({field_type!r})"
            ),
            details={"path": path, "field_name": field_name, "field_type": repr(field_type)},
            **kwargs,
        )

    @property
    def field_name(self) -> str:
        """The name of the unsupported field."""
        return self.details["field_name"]


class UnserializableValueError(ConfigAccessError):
    """Raised when a tree value cannot be represented as a plain config value."""

    def __init__(self, path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_UNSERIALIZABLE_VALUE",
            message=f"Value at {path} cannot be serialized: {reason}",
            details={"path": path, "reason": reason},
            **kwargs,
        )


class EnvVarUnsetError(ConfigAccessError):
    """Raised when an environment indirection names an unset or empty variable."""

    def __init__(self, path: str, variable: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_ENV_VAR_UNSET",
            message=f"Value at {path} refers to environment variable {variable} which is not set",
            details={"path": path, "variable": variable},
            **kwargs,
        )

    @property
    def variable(self) -> str:
        """The environment variable name that could not be resolved."""
        return self.details["variable"]


class ErrorCodes:
    """All config-access error codes as constants.

    Example:
        if error.code == ErrorCodes.PATH_MISSING:
            use_fallback()
    """

    PATH_MISSING = "CONFIG_PATH_MISSING"
    TYPE_MISMATCH = "CONFIG_TYPE_MISMATCH"
    NIL_DOCUMENT = "CONFIG_NIL_DOCUMENT"
    UNSUPPORTED_FIELD = "CONFIG_UNSUPPORTED_FIELD"
    UNSERIALIZABLE_VALUE = "CONFIG_UNSERIALIZABLE_VALUE"
    ENV_VAR_UNSET = "CONFIG_ENV_VAR_UNSET"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
