from __future__ import annotations

import io

from watchdiff.terminal import supports_color


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_color_requires_a_terminal() -> None:
    assert not supports_color(io.StringIO(), {"TERM": "xterm-256color"})
    assert supports_color(_Tty(), {"TERM": "xterm-256color"})


def test_color_disabled_for_missing_or_dumb_term() -> None:
    assert not supports_color(_Tty(), {})
    assert not supports_color(_Tty(), {"TERM": ""})
    assert not supports_color(_Tty(), {"TERM": "dumb"})


def test_no_color_environment_variable_wins() -> None:
    assert not supports_color(_Tty(), {"TERM": "xterm", "NO_COLOR": "1"})
