from __future__ import annotations

from watchdiff.errors import (
    ERROR_CODE_DECODE_FAILED,
    ERROR_CODE_DIFF_FAILED,
    BaselineNotSeededError,
    DiffError,
    InvalidValueError,
    NormalizationError,
    StreamDecodeError,
    WatchDiffError,
)


def test_error_codes_are_stable() -> None:
    assert StreamDecodeError.code == ERROR_CODE_DECODE_FAILED == "DECODE_FAILED"
    assert InvalidValueError.code == ERROR_CODE_DIFF_FAILED == "DIFF_FAILED"
    assert NormalizationError.code == "NORMALIZE_FAILED"
    assert BaselineNotSeededError.code == "BASELINE_EMPTY"


def test_error_hierarchy() -> None:
    assert issubclass(InvalidValueError, DiffError)
    for error_type in (StreamDecodeError, NormalizationError, DiffError, BaselineNotSeededError):
        assert issubclass(error_type, WatchDiffError)


def test_error_carries_message_and_details() -> None:
    error = StreamDecodeError("Expecting value at line 1 column 7", details={"line": 1, "column": 7})

    assert error.code == "DECODE_FAILED"
    assert error.message == "Expecting value at line 1 column 7"
    assert error.details["column"] == 7
    assert str(error) == "Expecting value at line 1 column 7"
