from __future__ import annotations

import pytest

from watchdiff.errors import BaselineNotSeededError
from watchdiff.snapshot import BaselinePolicy, SnapshotManager


def test_first_value_seeds_without_diff_request() -> None:
    manager = SnapshotManager()

    assert not manager.seeded
    assert manager.consider({"a": 1}) is None
    assert manager.seeded
    assert manager.current() == {"a": 1}


def test_current_fails_before_seed() -> None:
    with pytest.raises(BaselineNotSeededError):
        SnapshotManager().current()


def test_commit_before_seed_fails() -> None:
    manager = SnapshotManager()
    seeded = SnapshotManager()
    seeded.consider({})
    request = seeded.consider({"a": 1})
    assert request is not None
    with pytest.raises(BaselineNotSeededError):
        manager.commit(request)


def test_previous_policy_rolls_baseline_forward() -> None:
    manager = SnapshotManager(BaselinePolicy.PREVIOUS)
    manager.consider({"v": 1})

    request = manager.consider({"v": 2})
    assert request is not None
    assert request.baseline == {"v": 1}
    manager.commit(request)
    assert manager.current() == {"v": 2}

    request = manager.consider({"v": 3})
    assert request is not None
    assert request.baseline == {"v": 2}


def test_first_policy_keeps_initial_baseline() -> None:
    manager = SnapshotManager(BaselinePolicy.FIRST)
    manager.consider({"v": 1})

    for value in ({"v": 2}, {"v": 3}):
        request = manager.consider(value)
        assert request is not None
        assert request.baseline == {"v": 1}
        manager.commit(request)

    assert manager.current() == {"v": 1}


def test_uncommitted_request_leaves_baseline_untouched() -> None:
    manager = SnapshotManager(BaselinePolicy.PREVIOUS)
    manager.consider({"v": 1})
    manager.consider({"v": 2})

    assert manager.current() == {"v": 1}


def test_stored_baseline_is_a_deep_copy() -> None:
    manager = SnapshotManager()
    seed = {"spec": {"ports": [80]}}
    manager.consider(seed)
    seed["spec"]["ports"].append(443)

    update = {"spec": {"ports": [8080]}}
    request = manager.consider(update)
    assert request is not None
    manager.commit(request)
    update["spec"]["ports"].append(9090)

    assert manager.current() == {"spec": {"ports": [8080]}}
