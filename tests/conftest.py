"""Shared fixtures: decoded configuration documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_json(name: str) -> dict[str, Any]:
    """Decode a JSON fixture file into a ConfigNode."""
    return json.loads((FIXTURES_DIR / name).read_text())


def load_yaml(name: str) -> dict[str, Any]:
    """Decode a YAML fixture file into a ConfigNode."""
    return yaml.safe_load((FIXTURES_DIR / name).read_text())


@pytest.fixture(params=["json", "yaml"])
def simple_node(request: pytest.FixtureRequest) -> dict[str, Any]:
    """The simple document, decoded once from JSON and once from YAML."""
    if request.param == "json":
        return load_json("simple.json")
    return load_yaml("simple.yaml")


@pytest.fixture
def merge_base() -> dict[str, Any]:
    return load_json("merge-base.json")


@pytest.fixture
def merge_additions() -> dict[str, Any]:
    return load_json("merge-additions.json")


@pytest.fixture
def handler_calls() -> list[tuple[str, Exception]]:
    """Records every (path, error) passed to a quiet selector handler."""
    return []
