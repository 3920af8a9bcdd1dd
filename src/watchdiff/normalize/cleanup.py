from __future__ import annotations

import json
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from watchdiff.errors import NormalizationError

Normalizer = Callable[[Any], Any]

# Fields the API server fills in on every write. They change on each watch
# event and would drown real edits in the report.
DEFAULT_DROPPED_PATHS: tuple[tuple[str, ...], ...] = (
    ("metadata", "managedFields"),
    ("metadata", "resourceVersion"),
    ("metadata", "uid"),
    ("metadata", "generation"),
    ("metadata", "creationTimestamp"),
    ("metadata", "selfLink"),
    ("metadata", "annotations", "kubectl.kubernetes.io/last-applied-configuration"),
    ("metadata", "annotations", "deployment.kubernetes.io/revision"),
)
STATUS_PATH: tuple[str, ...] = ("status",)

# Containers that are dropped when stripping leaves them empty.
_PRUNE_WHEN_EMPTY = {("metadata", "annotations"), ("metadata", "labels"), ("metadata",)}


def parse_dotted_path(raw: str) -> tuple[str, ...]:
    """Split ``a.b.c`` into segments; ``\\.`` escapes a literal dot."""
    segments: list[str] = []
    current: list[str] = []
    escaped = False
    for char in raw:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char == ".":
            segments.append("".join(current))
            current = []
        else:
            current.append(char)
    segments.append("".join(current))
    if any(not segment for segment in segments):
        raise ValueError(f"Invalid field path: {raw!r}")
    return tuple(segments)


@dataclass(slots=True, frozen=True)
class CleanupNormalizer:
    """Strip server-populated noise from a resource before it is diffed."""

    extra_paths: tuple[tuple[str, ...], ...] = ()
    keep_status: bool = False

    @property
    def dropped_paths(self) -> tuple[tuple[str, ...], ...]:
        paths = DEFAULT_DROPPED_PATHS + self.extra_paths
        if not self.keep_status:
            paths = (STATUS_PATH, *paths)
        return paths

    def _copy(self, value: Any, path: tuple[str, ...], dropped: set[tuple[str, ...]]) -> Any:
        if isinstance(value, Mapping):
            cleaned: dict[str, Any] = {}
            for key, item in value.items():
                child_path = (*path, str(key))
                if child_path in dropped:
                    continue
                child = self._copy(item, child_path, dropped)
                if child_path in _PRUNE_WHEN_EMPTY and isinstance(child, dict) and not child:
                    continue
                cleaned[str(key)] = child
            return cleaned
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            # Paths address object fields only; array items are copied as-is.
            return [self._copy(item, (), set()) for item in value]
        return value

    def __call__(self, value: Any) -> Any:
        if not isinstance(value, Mapping):
            raise NormalizationError(
                f"Expected a JSON object to clean up, got {type(value).__name__}",
                details={"type": type(value).__name__},
            )
        return self._copy(value, (), set(self.dropped_paths))


@dataclass(slots=True, frozen=True)
class CommandNormalizer:
    """Pipe each object through an external filter such as ``kubectl neat``."""

    command: tuple[str, ...]
    timeout_seconds: float = 30.0

    def __call__(self, value: Any) -> Any:
        payload = json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        try:
            completed = subprocess.run(
                list(self.command),
                input=payload,
                capture_output=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise NormalizationError(
                f"Cleanup command {self.command[0]!r} failed: {exc}",
                details={"command": list(self.command)},
            ) from exc

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            raise NormalizationError(
                f"Cleanup command exited with status {completed.returncode}: {stderr}",
                details={"command": list(self.command), "returncode": completed.returncode},
            )

        try:
            return json.loads(completed.stdout)
        except json.JSONDecodeError as exc:
            raise NormalizationError(
                f"Cleanup command produced invalid JSON: {exc.msg}",
                details={"command": list(self.command)},
            ) from exc


def identity_normalizer(value: Any) -> Any:
    return value


__all__ = [
    "DEFAULT_DROPPED_PATHS",
    "CleanupNormalizer",
    "CommandNormalizer",
    "Normalizer",
    "identity_normalizer",
    "parse_dotted_path",
]
