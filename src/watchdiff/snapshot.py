"""Baseline ownership and retention policy."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from watchdiff.errors import BaselineNotSeededError
from watchdiff.values import clone_value


class BaselinePolicy(str, Enum):
    PREVIOUS = "previous"
    FIRST = "first"


@dataclass(slots=True, frozen=True)
class DiffRequest:
    baseline: Any
    current: Any


class SnapshotManager:
    """Holds the single baseline value that each new snapshot is compared with.

    The manager starts empty. The first value passed to :meth:`consider` seeds
    the baseline and yields no diff request; every later value yields a
    :class:`DiffRequest`. The baseline only moves when :meth:`commit` is called
    after a successful diff cycle, and only under the ``previous`` policy.
    Stored values are deep copies so callers may keep mutating their objects.
    """

    def __init__(self, policy: BaselinePolicy = BaselinePolicy.PREVIOUS) -> None:
        self._policy = policy
        self._baseline: Any = None
        self._seeded = False

    @property
    def policy(self) -> BaselinePolicy:
        return self._policy

    @property
    def seeded(self) -> bool:
        return self._seeded

    def current(self) -> Any:
        if not self._seeded:
            raise BaselineNotSeededError("No baseline snapshot has been recorded yet")
        return self._baseline

    def consider(self, value: Any) -> DiffRequest | None:
        if not self._seeded:
            self._baseline = clone_value(value)
            self._seeded = True
            return None
        return DiffRequest(baseline=self._baseline, current=clone_value(value))

    def commit(self, request: DiffRequest) -> None:
        if not self._seeded:
            raise BaselineNotSeededError("Cannot commit a diff before the baseline is seeded")
        if self._policy is BaselinePolicy.PREVIOUS:
            self._baseline = request.current


__all__ = ["BaselinePolicy", "DiffRequest", "SnapshotManager"]
