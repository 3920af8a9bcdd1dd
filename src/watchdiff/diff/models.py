from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from watchdiff.values import format_path

PathSegment = str | int


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class ChangeKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(slots=True, frozen=True)
class Change:
    kind: ChangeKind
    path: tuple[PathSegment, ...]
    from_value: Any = MISSING
    to_value: Any = MISSING

    @property
    def path_text(self) -> str:
        return format_path(self.path)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind.value, "path": list(self.path)}
        if self.from_value is not MISSING:
            payload["from"] = self.from_value
        if self.to_value is not MISSING:
            payload["to"] = self.to_value
        return payload


Changelog = list[Change]


__all__ = ["MISSING", "Change", "ChangeKind", "Changelog", "PathSegment"]
