from __future__ import annotations

import json
from typing import Any

import typer

from watchdiff.constants import (
    CLOSING_SEPARATOR_WIDTH,
    ELLIPSIS,
    MAX_EXACT_FLOAT,
    MAX_SUMMARY_KEYS,
    MAX_VALUE_TEXT,
    SEPARATOR_WIDTH,
    TRUNCATED_VALUE_TEXT,
)
from watchdiff.diff.models import Change, ChangeKind, Changelog
from watchdiff.values import ValueKind, kind_of


class _Styler:
    def __init__(self, enabled: bool) -> None:
        self.enabled = enabled

    def __call__(self, text: str, fg: str | None = None, bold: bool = False) -> str:
        if not self.enabled:
            return text
        return typer.style(text, fg=fg, bold=bold or None)


def _truncate(text: str) -> str:
    if len(text) > MAX_VALUE_TEXT:
        return text[:TRUNCATED_VALUE_TEXT] + ELLIPSIS
    return text


def summarize_value(value: Any) -> str:
    kind = kind_of(value)
    if kind is ValueKind.STRING:
        if len(value) > MAX_VALUE_TEXT:
            return _truncate(value)
        return f'"{value}"'
    if kind is ValueKind.OBJECT:
        keys = sorted(value)
        if len(keys) > MAX_SUMMARY_KEYS:
            return f"map[{', '.join(keys[:MAX_SUMMARY_KEYS])}{ELLIPSIS} ({len(keys)} keys)]"
        return f"map[{', '.join(keys)}]"
    if kind is ValueKind.ARRAY:
        return f"array[{len(value)} items]"
    if isinstance(value, float) and value.is_integer() and abs(value) < MAX_EXACT_FLOAT:
        return str(int(value))
    return _truncate(json.dumps(value, ensure_ascii=False))


def _render_change(number: int, change: Change, style: _Styler) -> list[str]:
    prefix = style(f"{number}. ", fg=typer.colors.WHITE, bold=True)
    path = change.path_text
    if change.kind is ChangeKind.CREATE:
        return [
            prefix + style("+ CREATED: ", fg=typer.colors.GREEN, bold=True) + style(path, fg=typer.colors.GREEN),
            style("  + Value: ", fg=typer.colors.GREEN)
            + style(summarize_value(change.to_value), fg=typer.colors.GREEN, bold=True),
        ]
    if change.kind is ChangeKind.UPDATE:
        return [
            prefix + style("~ UPDATED: ", fg=typer.colors.YELLOW, bold=True) + style(path, fg=typer.colors.YELLOW),
            style("  - Old: ", fg=typer.colors.RED)
            + style(summarize_value(change.from_value), fg=typer.colors.RED, bold=True),
            style("  + New: ", fg=typer.colors.GREEN)
            + style(summarize_value(change.to_value), fg=typer.colors.GREEN, bold=True),
        ]
    if change.kind is ChangeKind.DELETE:
        return [
            prefix + style("- DELETED: ", fg=typer.colors.RED, bold=True) + style(path, fg=typer.colors.RED),
            style("  - Value: ", fg=typer.colors.RED)
            + style(summarize_value(change.from_value), fg=typer.colors.RED, bold=True),
        ]
    raise ValueError(f"Unknown change kind: {change.kind!r}")


def format_changelog(changelog: Changelog, colorize: bool = True) -> str:
    style = _Styler(colorize)
    if not changelog:
        return style("No changes detected", fg=typer.colors.YELLOW) + "\n"

    separator = style("=" * SEPARATOR_WIDTH, fg=typer.colors.CYAN)
    noun = "change" if len(changelog) == 1 else "changes"
    lines: list[str] = [
        separator,
        style(f"Found {len(changelog)} {noun}:", fg=typer.colors.WHITE, bold=True),
        separator,
    ]
    for number, change in enumerate(changelog, start=1):
        lines.extend(_render_change(number, change, style))
    lines.append("")
    lines.append(style("=" * CLOSING_SEPARATOR_WIDTH, fg=typer.colors.CYAN))
    return "\n".join(lines) + "\n"


__all__ = ["format_changelog", "summarize_value"]
