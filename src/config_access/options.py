"""Per-call options for Selector lookups."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable

__all__ = ["Opts", "DEFAULT_ENV_PREFIX"]

DEFAULT_ENV_PREFIX = "$"


@dataclass(frozen=True)
class Opts:
    """Optional behaviour for a single Selector call.

    Attributes:
        on_missing: Value returned when the requested path is absent. The
            value is trusted as-is and not checked against the requested type.
            None means no substitute.
        env_lookup: Function resolving an environment variable name to its
            value. Defaults to os.environ.get.
        env_prefix: Prefix marking a string as the name of an environment
            variable. Defaults to "$".
    """

    on_missing: Any = None
    env_lookup: Callable[[str], str | None] | None = None
    env_prefix: str = DEFAULT_ENV_PREFIX

    def lookup_env(self, name: str) -> str | None:
        """Resolve an environment variable name with the configured lookup."""
        lookup = self.env_lookup if self.env_lookup is not None else os.environ.get
        return lookup(name)
