from __future__ import annotations

from typing import Any

from watchdiff.diff.models import Change, ChangeKind, Changelog, PathSegment
from watchdiff.values import ValueKind, kind_of, validate_value, values_equal


def _diff_objects(old: dict[str, Any], new: dict[str, Any], path: tuple[PathSegment, ...]) -> Changelog:
    changes: Changelog = []
    for key in sorted(set(old) | set(new)):
        key_path = (*path, key)
        if key not in old:
            changes.append(Change(kind=ChangeKind.CREATE, path=key_path, to_value=new[key]))
        elif key not in new:
            changes.append(Change(kind=ChangeKind.DELETE, path=key_path, from_value=old[key]))
        else:
            changes.extend(_diff(old[key], new[key], key_path))
    return changes


def _diff_arrays(old: list[Any], new: list[Any], path: tuple[PathSegment, ...]) -> Changelog:
    changes: Changelog = []
    common = min(len(old), len(new))
    for index in range(common):
        changes.extend(_diff(old[index], new[index], (*path, index)))
    for index in range(common, len(new)):
        changes.append(Change(kind=ChangeKind.CREATE, path=(*path, index), to_value=new[index]))
    for index in range(common, len(old)):
        changes.append(Change(kind=ChangeKind.DELETE, path=(*path, index), from_value=old[index]))
    return changes


def _diff(old: Any, new: Any, path: tuple[PathSegment, ...]) -> Changelog:
    old_kind = kind_of(old)
    new_kind = kind_of(new)

    if old_kind is ValueKind.OBJECT and new_kind is ValueKind.OBJECT:
        return _diff_objects(old, new, path)
    if old_kind is ValueKind.ARRAY and new_kind is ValueKind.ARRAY:
        return _diff_arrays(list(old), list(new), path)
    if values_equal(old, new):
        return []
    return [Change(kind=ChangeKind.UPDATE, path=path, from_value=old, to_value=new)]


def diff(old: Any, new: Any) -> Changelog:
    """Structural changelog turning ``old`` into ``new``.

    Object keys are visited in sorted order and array items by index, so the
    result is reproducible for the same inputs. Both trees are validated up
    front; an invalid node raises :class:`~watchdiff.errors.InvalidValueError`
    and no partial changelog is returned.
    """
    validate_value(old)
    validate_value(new)
    return _diff(old, new, ())


__all__ = ["diff"]
