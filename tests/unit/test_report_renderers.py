from __future__ import annotations

import re

from watchdiff.diff import Change, ChangeKind, diff
from watchdiff.report import format_changelog, summarize_value

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_styles(text: str) -> str:
    return _ANSI_ESCAPE.sub("", text)


def test_no_changes_message() -> None:
    assert format_changelog([], colorize=False) == "No changes detected\n"


def test_report_lists_numbered_changes() -> None:
    report = format_changelog(diff({"a": 1}, {"a": 2, "b": 3}), colorize=False)

    assert report == "\n".join(
        [
            "=" * 60,
            "Found 2 changes:",
            "=" * 60,
            "1. ~ UPDATED: a",
            "  - Old: 1",
            "  + New: 2",
            "2. + CREATED: b",
            "  + Value: 3",
            "",
            "=" * 61,
            "",
        ]
    )


def test_delete_and_root_paths() -> None:
    report = format_changelog(
        [
            Change(kind=ChangeKind.DELETE, path=("metadata", "labels", "tier"), from_value="web"),
            Change(kind=ChangeKind.UPDATE, path=(), from_value=None, to_value=[1, 2]),
        ],
        colorize=False,
    )

    assert '1. - DELETED: metadata.labels.tier\n  - Value: "web"' in report
    assert "2. ~ UPDATED: root\n  - Old: null\n  + New: array[2 items]" in report


def test_single_change_header() -> None:
    report = format_changelog([Change(kind=ChangeKind.CREATE, path=("x",), to_value=True)], colorize=False)
    assert "Found 1 change:" in report
    assert "  + Value: true" in report


def test_long_strings_are_truncated() -> None:
    assert summarize_value("x" * 150) == "x" * 97 + "..."
    assert summarize_value("x" * 100) == '"' + "x" * 100 + '"'
    assert summarize_value("short") == '"short"'


def test_long_scalar_text_is_truncated() -> None:
    big = 10**120
    assert summarize_value(big) == str(big)[:97] + "..."
    assert summarize_value(2.5) == "2.5"
    assert summarize_value(False) == "false"


def test_integral_floats_render_without_fraction() -> None:
    assert summarize_value(1.0) == "1"
    assert summarize_value(-3.0) == "-3"
    assert summarize_value(0.5) == "0.5"
    assert summarize_value(1e21) == "1e+21"


def test_closing_separator_is_one_wider() -> None:
    lines = format_changelog(diff({"a": 1.0}, {"a": 2.5}), colorize=False).splitlines()

    assert lines[0] == "=" * 60
    assert lines[-1] == "=" * 61
    assert "  - Old: 1" in lines


def test_map_summaries() -> None:
    assert summarize_value({"e": 5, "d": 4, "c": 3, "b": 2, "a": 1}) == "map[a, b, c... (5 keys)]"
    assert summarize_value({"b": 1, "a": 2}) == "map[a, b]"
    assert summarize_value({}) == "map[]"


def test_array_summary_shows_only_count() -> None:
    assert summarize_value([{"a": 1}, "b", 3]) == "array[3 items]"


def test_colorized_report_has_same_text_once_styles_are_removed() -> None:
    changelog = diff({"a": 1, "c": {"d": 1}}, {"a": 2, "b": 3})
    plain = format_changelog(changelog, colorize=False)
    colored = format_changelog(changelog, colorize=True)

    assert colored != plain
    assert "\x1b[" in colored
    assert _strip_styles(colored) == plain


def test_colorized_no_changes_message() -> None:
    colored = format_changelog([], colorize=True)
    assert _strip_styles(colored) == "No changes detected\n"
    assert colored.startswith("\x1b[")
