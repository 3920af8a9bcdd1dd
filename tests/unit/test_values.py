from __future__ import annotations

import pytest

from watchdiff.errors import InvalidValueError
from watchdiff.values import ValueKind, clone_value, format_path, kind_of, validate_value, values_equal


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, ValueKind.NULL),
        (True, ValueKind.BOOLEAN),
        (0, ValueKind.NUMBER),
        (2.5, ValueKind.NUMBER),
        ("x", ValueKind.STRING),
        ([1, 2], ValueKind.ARRAY),
        ({"a": 1}, ValueKind.OBJECT),
    ],
)
def test_kind_of_tags_json_values(value: object, kind: ValueKind) -> None:
    assert kind_of(value) is kind


def test_kind_of_rejects_non_json_types() -> None:
    with pytest.raises(InvalidValueError, match="Unsupported value type 'set'"):
        kind_of({1, 2})
    with pytest.raises(InvalidValueError, match="Non-finite"):
        kind_of(float("nan"))


def test_values_equal_is_kind_sensitive() -> None:
    assert not values_equal(1, "1")
    assert not values_equal(True, 1)
    assert not values_equal(None, False)
    assert values_equal(1, 1.0)
    assert values_equal({"a": [1, {"b": None}]}, {"a": [1, {"b": None}]})
    assert not values_equal({"a": [1]}, {"a": [1, 2]})
    assert not values_equal({"a": 1}, {"b": 1})


def test_validate_value_reports_path_of_bad_node() -> None:
    with pytest.raises(InvalidValueError, match=r"at spec\.items\.1") as excinfo:
        validate_value({"spec": {"items": [1, object()]}})
    assert excinfo.value.details["path"] == ["spec", "items", 1]


def test_validate_value_rejects_non_string_keys() -> None:
    with pytest.raises(InvalidValueError, match="is not a string"):
        validate_value({1: "a"})


def test_clone_value_is_independent() -> None:
    original = {"a": {"b": [1]}}
    copied = clone_value(original)
    original["a"]["b"].append(2)
    assert copied == {"a": {"b": [1]}}


def test_format_path() -> None:
    assert format_path(()) == "root"
    assert format_path(("spec", "containers", 0, "image")) == "spec.containers.0.image"
