"""config-access - Typed access to decoded configuration documents."""

from __future__ import annotations

# Data model
from config_access.node import PATH_SEPARATOR, ConfigNode, ValueKind, kind_of

# Path resolution and typed accessors
from config_access.access import (
    array,
    bool_val,
    float_array,
    float_val,
    int_array,
    int_val,
    object_val,
    path_exists,
    string_array,
    string_val,
    value,
)

# Selectors
from config_access.options import DEFAULT_ENV_PREFIX, Opts
from config_access.selector import (
    Selector,
    new_default_selector,
    new_selector,
    selector_from_path_values,
)
from config_access.quiet import (
    DeferredErrorQuietSelector,
    ErrorHandler,
    QuietSelector,
    new_deferred_error_quiet_selector,
    quiet_selector_from_path_values,
)

# Merge
from config_access.merge import ConfigMerger, DeepMerger, merge, merge_arrays

# Population
from config_access.populate import populate, populate_from_root, set_field

# Errors
from config_access.errors import (
    ConfigAccessError,
    EnvVarUnsetError,
    ErrorCodes,
    MissingPathError,
    NilDocumentError,
    TypeMismatchError,
    UnserializableValueError,
    UnsupportedFieldShapeError,
)

__version__ = "0.1.0"

__all__ = [
    # Data model
    "ConfigNode",
    "PATH_SEPARATOR",
    "ValueKind",
    "kind_of",
    # Accessors
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
    # Selectors
    "Opts",
    "DEFAULT_ENV_PREFIX",
    "Selector",
    "new_selector",
    "new_default_selector",
    "selector_from_path_values",
    "QuietSelector",
    "DeferredErrorQuietSelector",
    "ErrorHandler",
    "new_deferred_error_quiet_selector",
    "quiet_selector_from_path_values",
    # Merge
    "ConfigMerger",
    "DeepMerger",
    "merge",
    "merge_arrays",
    # Population
    "populate",
    "populate_from_root",
    "set_field",
    # Errors
    "ErrorCodes",
    "ConfigAccessError",
    "MissingPathError",
    "TypeMismatchError",
    "NilDocumentError",
    "UnsupportedFieldShapeError",
    "UnserializableValueError",
    "EnvVarUnsetError",
]
