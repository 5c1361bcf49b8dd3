"""Tests for populating dataclasses and pydantic models from config."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

import pytest
from pydantic import BaseModel, Field

from config_access.errors import (
    MissingPathError,
    NilDocumentError,
    TypeMismatchError,
    UnserializableValueError,
    UnsupportedFieldShapeError,
)
from config_access.populate import populate, populate_from_root, set_field


@dataclass
class Nested:
    name: str = ""


@dataclass
class SimpleConfig:
    name: str = ""
    enabled: bool = False
    count: int = 0
    ratio: float = 0.0
    string_array: list[str] = field(default_factory=list)
    float_array: list[float] = field(default_factory=list)
    int_array: list[int] = field(default_factory=list)
    string_map: dict[str, str] = field(default_factory=dict)
    unsupported: Optional[complex] = None
    string_array_map: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class ScalarConfig:
    name: str = ""
    enabled: bool = False
    count: int = 0
    ratio: float = 0.0
    fraction: int = 0


class SimpleModel(BaseModel):
    name: str = ""
    enabled: bool = False
    count: int = 0
    ratio: float = 0.0
    int_array: list[int] = Field(default_factory=list)
    string_map: dict[str, str] = Field(default_factory=dict)
    label: Optional[str] = Field(default=None, alias="literal")


class NestedModel(BaseModel):
    name: str = ""
    port: int = 0


@dataclass
class ServiceConfig:
    name: str = ""
    inner: Optional[Nested] = None
    model: Optional[NestedModel] = None


@dataclass
class StrictConfig:
    int_array: list[int] = field(default_factory=list)
    bool_array: list[bool] = field(default_factory=list)
    float_array: list[float] = field(default_factory=list)
    int_map: dict[str, int] = field(default_factory=dict)


# === populate ===


class TestPopulate:
    def test_populate_dataclass(self, simple_node: dict[str, Any]) -> None:
        sc = SimpleConfig()
        populate("simple_one", sc, simple_node)

        assert sc.name == "abc"
        assert sc.enabled is True
        assert sc.count == 32
        assert sc.ratio == 32.22
        assert sc.string_array == ["a", "b", "c"]
        assert sc.float_array == [1.1, 2.2, 3.3]
        assert len(sc.float_array) == 3
        assert sc.int_array == [1, 2, 3]
        assert sc.string_map == {"a": "b", "c": "d"}
        assert sc.string_array_map == {"x": ["a", "b"], "y": ["c"]}
        assert sc.unsupported is None

    def test_populate_pydantic_model(self, simple_node: dict[str, Any]) -> None:
        model = SimpleModel()
        populate("simple_one", model, simple_node)

        assert model.name == "abc"
        assert model.enabled is True
        assert model.count == 32
        assert model.ratio == 32.22
        assert model.int_array == [1, 2, 3]
        assert model.string_map == {"a": "b", "c": "d"}
        assert model.label == "plain"

    def test_int_field_truncates(self, simple_node: dict[str, Any]) -> None:
        sc = ScalarConfig()
        populate("simple_one", sc, simple_node)
        assert sc.fraction == 3

    def test_unmatched_fields_keep_values(self, simple_node: dict[str, Any]) -> None:
        sc = ScalarConfig(enabled=True, count=5)
        populate("simple_two", sc, simple_node)

        assert sc.name == "def"
        assert sc.enabled is True
        assert sc.count == 5

    def test_target_does_not_alias_document(self, simple_node: dict[str, Any]) -> None:
        sc = SimpleConfig()
        populate("simple_one", sc, simple_node)

        sc.string_array.append("z")
        sc.string_map["new"] = "value"
        assert simple_node["simple_one"]["string_array"] == ["a", "b", "c"]
        assert "new" not in simple_node["simple_one"]["string_map"]

    def test_scalar_round_trip(self, simple_node: dict[str, Any]) -> None:
        sc = ScalarConfig()
        populate("simple_one", sc, simple_node)

        source = simple_node["simple_one"]
        for name in ("name", "enabled", "count", "ratio"):
            assert dataclasses.asdict(sc)[name] == source[name]

    def test_missing_path(self, simple_node: dict[str, Any]) -> None:
        with pytest.raises(MissingPathError) as exc_info:
            populate("undefined", SimpleConfig(), simple_node)
        assert str(exc_info.value)

    def test_not_an_object(self, simple_node: dict[str, Any]) -> None:
        with pytest.raises(TypeMismatchError):
            populate("simple_one.name", SimpleConfig(), simple_node)

    def test_none_node(self) -> None:
        with pytest.raises(NilDocumentError):
            populate("a", SimpleConfig(), None)

    def test_unserializable_value(self, simple_node: dict[str, Any]) -> None:
        simple_node["simple_one"]["count"] = threading.Lock()
        sc = SimpleConfig()

        with pytest.raises(UnserializableValueError):
            populate("simple_one", sc, simple_node)
        assert sc == SimpleConfig()

    def test_wrong_scalar_type(self) -> None:
        with pytest.raises(TypeMismatchError):
            populate("a", ScalarConfig(), {"a": {"count": "32"}})
        with pytest.raises(TypeMismatchError):
            populate("a", ScalarConfig(), {"a": {"enabled": 1}})

    def test_failure_leaves_target_untouched(self) -> None:
        sc = ScalarConfig()
        with pytest.raises(TypeMismatchError):
            populate("a", sc, {"a": {"name": "set first", "count": "bad"}})
        assert sc == ScalarConfig()

    def test_unsupported_field_with_value(self) -> None:
        with pytest.raises(UnsupportedFieldShapeError) as exc_info:
            populate("a", SimpleConfig(), {"a": {"unsupported": {"real": 1, "imag": 2}}})
        assert exc_info.value.field_name == "unsupported"

    def test_bad_list_element(self) -> None:
        with pytest.raises(TypeMismatchError):
            populate("a", SimpleConfig(), {"a": {"int_array": [1, "two"]}})

    def test_empty_array_map_value(self, simple_node: dict[str, Any]) -> None:
        sc = SimpleConfig()
        simple_node["simple_one"]["string_array_map"] = {"x": []}
        with pytest.raises(TypeMismatchError) as exc_info:
            populate("simple_one", sc, simple_node)
        assert "empty array" in exc_info.value.message

    def test_non_string_array_map_value(self) -> None:
        with pytest.raises(TypeMismatchError) as exc_info:
            populate("a", SimpleConfig(), {"a": {"string_array_map": {"x": [True, False]}}})
        assert "array of bool" in exc_info.value.message

    def test_rejects_non_record_target(self) -> None:
        with pytest.raises(TypeError):
            populate("simple_one", {}, {"simple_one": {"name": "x"}})

    def test_unresolvable_annotation(self) -> None:
        class Local:
            pass

        @dataclass
        class Holder:
            item: Optional[Local] = None

        with pytest.raises(TypeError, match="Holder"):
            populate("a", Holder(), {"a": {"item": {}}})


class TestNestedRecords:
    def test_nested_dataclass(self) -> None:
        sc = ServiceConfig()
        populate("svc", sc, {"svc": {"name": "api", "inner": {"name": "y"}}})

        assert sc.name == "api"
        assert sc.inner == Nested(name="y")

    def test_nested_pydantic_model(self) -> None:
        sc = ServiceConfig()
        populate("svc", sc, {"svc": {"model": {"name": "db", "port": 5432}}})
        assert sc.model == NestedModel(name="db", port=5432)

    def test_nested_record_from_non_object(self) -> None:
        with pytest.raises(TypeMismatchError):
            populate("svc", ServiceConfig(), {"svc": {"inner": "y"}})

    def test_nested_record_bad_field(self) -> None:
        sc = ServiceConfig()
        with pytest.raises(TypeMismatchError):
            populate("svc", sc, {"svc": {"name": "api", "model": {"port": "5432"}}})
        assert sc == ServiceConfig()


class TestStrictConversion:
    @pytest.mark.parametrize(
        "contents",
        [
            {"int_array": ["1", "2"]},
            {"int_array": [1.5]},
            {"bool_array": [1, 0]},
            {"bool_array": ["true"]},
            {"int_map": {"x": "5"}},
        ],
    )
    def test_no_coercion(self, contents: dict[str, Any]) -> None:
        sc = StrictConfig()
        with pytest.raises(TypeMismatchError):
            populate("a", sc, {"a": contents})
        assert sc == StrictConfig()

    def test_int_elements_accepted_for_float_list(self) -> None:
        sc = StrictConfig()
        populate("a", sc, {"a": {"float_array": [1, 2], "int_map": {"x": 5}}})

        assert sc.float_array == [1.0, 2.0]
        assert sc.int_map == {"x": 5}


class TestPopulateFromRoot:
    def test_whole_document(self) -> None:
        sc = ScalarConfig()
        populate_from_root(sc, {"name": "root", "count": 4})
        assert sc.name == "root"
        assert sc.count == 4

    def test_none_node(self) -> None:
        with pytest.raises(NilDocumentError):
            populate_from_root(ScalarConfig(), None)


# === set_field ===


class TestSetField:
    def test_scalars_and_collections(self, simple_node: dict[str, Any]) -> None:
        sc = SimpleConfig()

        set_field("name", "simple_one.name", sc, simple_node)
        set_field("enabled", "simple_one.enabled", sc, simple_node)
        set_field("count", "simple_one.count", sc, simple_node)
        set_field("ratio", "simple_one.ratio", sc, simple_node)
        set_field("int_array", "simple_one.int_array", sc, simple_node)
        set_field("string_map", "simple_one.string_map", sc, simple_node)
        set_field("string_array_map", "simple_one.string_array_map", sc, simple_node)

        assert sc.name == "abc"
        assert sc.enabled is True
        assert sc.count == 32
        assert sc.ratio == 32.22
        assert sc.int_array == [1, 2, 3]
        assert sc.string_map == {"a": "b", "c": "d"}
        assert sc.string_array_map == {"x": ["a", "b"], "y": ["c"]}

    def test_unsupported_field(self, simple_node: dict[str, Any]) -> None:
        with pytest.raises(UnsupportedFieldShapeError):
            set_field("unsupported", "simple_one.int_array", SimpleConfig(), simple_node)

    def test_missing_path(self, simple_node: dict[str, Any]) -> None:
        with pytest.raises(MissingPathError):
            set_field("string_map", "missing.path", SimpleConfig(), simple_node)
        with pytest.raises(MissingPathError):
            set_field("string_map", "simple_one.bool_a", SimpleConfig(), simple_node)

    def test_map_from_non_object(self, simple_node: dict[str, Any]) -> None:
        with pytest.raises(TypeMismatchError):
            set_field("string_map", "simple_one.enabled", SimpleConfig(), simple_node)

    def test_map_array_restrictions(self, simple_node: dict[str, Any]) -> None:
        with pytest.raises(TypeMismatchError):
            set_field("string_array_map", "simple_one.empty_string_array_map", SimpleConfig(), simple_node)
        with pytest.raises(TypeMismatchError):
            set_field("string_array_map", "simple_one.bool_array_map", SimpleConfig(), simple_node)

    def test_unknown_field(self, simple_node: dict[str, Any]) -> None:
        with pytest.raises(ValueError):
            set_field("no_such_field", "simple_one.name", SimpleConfig(), simple_node)
