from __future__ import annotations

import shlex
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from watchdiff.constants import DEFAULT_KUBECTL
from watchdiff.errors import ConfigError
from watchdiff.normalize import CleanupNormalizer, CommandNormalizer, Normalizer, parse_dotted_path
from watchdiff.snapshot import BaselinePolicy


@dataclass(slots=True)
class WatchConfig:
    resource_type: str = ""
    resource_name: str = ""
    namespace: str | None = None
    context: str | None = None
    kubectl: str = DEFAULT_KUBECTL
    diff_with_first: bool = False
    no_color: bool = False
    neat_command: list[str] = field(default_factory=list)
    ignore_paths: list[str] = field(default_factory=list)
    keep_status: bool = False

    @property
    def baseline_policy(self) -> BaselinePolicy:
        return BaselinePolicy.FIRST if self.diff_with_first else BaselinePolicy.PREVIOUS

    def build_normalizer(self) -> Normalizer:
        if self.neat_command:
            return CommandNormalizer(command=tuple(self.neat_command))
        try:
            extra = tuple(parse_dotted_path(raw) for raw in self.ignore_paths)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        return CleanupNormalizer(extra_paths=extra, keep_status=self.keep_status)

    def with_overrides(self, **overrides: Any) -> WatchConfig:
        """Copy with every non-``None`` override applied."""
        known = {item.name for item in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown config fields: {', '.join(unknown)}")
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file must be a mapping: {path}")
    return loaded


def _parse_optional_str(raw: Any, *, field_name: str) -> str | None:
    if raw is None:
        return None
    if not isinstance(raw, str | int) or isinstance(raw, bool):
        raise ConfigError(f"{field_name} must be a string")
    text = str(raw).strip()
    return text or None


def _parse_bool(raw: Any, *, field_name: str) -> bool:
    if raw is None:
        return False
    if not isinstance(raw, bool):
        raise ConfigError(f"{field_name} must be true or false")
    return raw


def _parse_command(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        return shlex.split(raw)
    if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        return list(raw)
    raise ConfigError("neat_command must be a string or a list of strings")


def _parse_string_list(raw: Any, *, field_name: str) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigError(f"{field_name} must be a list")
    return [str(item) for item in raw]


def parse_config(data: dict[str, Any]) -> WatchConfig:
    known = {item.name for item in fields(WatchConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    return WatchConfig(
        resource_type=_parse_optional_str(data.get("resource_type"), field_name="resource_type") or "",
        resource_name=_parse_optional_str(data.get("resource_name"), field_name="resource_name") or "",
        namespace=_parse_optional_str(data.get("namespace"), field_name="namespace"),
        context=_parse_optional_str(data.get("context"), field_name="context"),
        kubectl=_parse_optional_str(data.get("kubectl"), field_name="kubectl") or DEFAULT_KUBECTL,
        diff_with_first=_parse_bool(data.get("diff_with_first"), field_name="diff_with_first"),
        no_color=_parse_bool(data.get("no_color"), field_name="no_color"),
        neat_command=_parse_command(data.get("neat_command")),
        ignore_paths=_parse_string_list(data.get("ignore_paths"), field_name="ignore_paths"),
        keep_status=_parse_bool(data.get("keep_status"), field_name="keep_status"),
    )


def load_config(path: Path | None) -> WatchConfig:
    if path is None:
        return WatchConfig()
    return parse_config(_load_yaml(path))


__all__ = ["WatchConfig", "load_config", "parse_config"]
