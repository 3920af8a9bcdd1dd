"""Kind tagging for decoded JSON values.

Every value handled by the diff engine and the report renderer is one of the
plain types produced by :mod:`json`: ``None``, ``bool``, ``int``/``float``,
``str``, ``list`` and ``dict`` with string keys. :func:`kind_of` maps a value to
its :class:`ValueKind` and rejects anything else, so callers dispatch on the
kind instead of repeating ``isinstance`` ladders.
"""
from __future__ import annotations

import copy
import math
from enum import Enum
from typing import Any

from watchdiff.errors import InvalidValueError


class ValueKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: Any) -> ValueKind:
    # bool is a subclass of int, so it has to be checked first.
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int | float):
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidValueError(f"Non-finite number is not a JSON value: {value!r}")
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list | tuple):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    raise InvalidValueError(
        f"Unsupported value type {type(value).__name__!r}",
        details={"type": type(value).__name__},
    )


def validate_value(value: Any, path: tuple[str | int, ...] = ()) -> None:
    """Walk a value tree and raise :class:`InvalidValueError` on the first bad node."""
    try:
        kind = kind_of(value)
    except InvalidValueError as exc:
        raise InvalidValueError(
            f"{exc.message} at {format_path(path)}",
            details={**exc.details, "path": list(path)},
        ) from exc

    if kind is ValueKind.OBJECT:
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidValueError(
                    f"Object key {key!r} is not a string at {format_path(path)}",
                    details={"path": list(path)},
                )
            validate_value(item, (*path, key))
    elif kind is ValueKind.ARRAY:
        for index, item in enumerate(value):
            validate_value(item, (*path, index))


def values_equal(left: Any, right: Any) -> bool:
    """Deep, kind-sensitive equality: ``1 != "1"`` and ``True != 1``."""
    left_kind = kind_of(left)
    if left_kind is not kind_of(right):
        return False
    if left_kind is ValueKind.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)
    if left_kind is ValueKind.ARRAY:
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))
    return bool(left == right)


def clone_value(value: Any) -> Any:
    return copy.deepcopy(value)


def format_path(path: tuple[str | int, ...] | list[str | int]) -> str:
    if not path:
        return "root"
    return ".".join(str(segment) for segment in path)


__all__ = [
    "ValueKind",
    "clone_value",
    "format_path",
    "kind_of",
    "validate_value",
    "values_equal",
]
