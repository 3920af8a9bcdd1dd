from __future__ import annotations

from typing import Any

ERROR_CODE_DECODE_FAILED = "DECODE_FAILED"
ERROR_CODE_NORMALIZE_FAILED = "NORMALIZE_FAILED"
ERROR_CODE_DIFF_FAILED = "DIFF_FAILED"
ERROR_CODE_BASELINE_EMPTY = "BASELINE_EMPTY"
ERROR_CODE_SOURCE_START_FAILED = "SOURCE_START_FAILED"
ERROR_CODE_CONFIG_INVALID = "CONFIG_INVALID"


class WatchDiffError(Exception):
    code = "WATCHDIFF_ERROR"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})


class StreamDecodeError(WatchDiffError):
    """A single chunk of the input stream could not be decoded into an object."""

    code = ERROR_CODE_DECODE_FAILED


class NormalizationError(WatchDiffError):
    code = ERROR_CODE_NORMALIZE_FAILED


class DiffError(WatchDiffError):
    code = ERROR_CODE_DIFF_FAILED


class InvalidValueError(DiffError):
    """Raised when a value tree contains something JSON cannot represent."""


class BaselineNotSeededError(WatchDiffError):
    code = ERROR_CODE_BASELINE_EMPTY


class SourceStartError(WatchDiffError):
    code = ERROR_CODE_SOURCE_START_FAILED


class ConfigError(WatchDiffError):
    code = ERROR_CODE_CONFIG_INVALID


__all__ = [
    "ERROR_CODE_BASELINE_EMPTY",
    "ERROR_CODE_CONFIG_INVALID",
    "ERROR_CODE_DECODE_FAILED",
    "ERROR_CODE_DIFF_FAILED",
    "ERROR_CODE_NORMALIZE_FAILED",
    "ERROR_CODE_SOURCE_START_FAILED",
    "BaselineNotSeededError",
    "ConfigError",
    "DiffError",
    "InvalidValueError",
    "NormalizationError",
    "SourceStartError",
    "StreamDecodeError",
    "WatchDiffError",
]
