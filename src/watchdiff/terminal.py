from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from typing import IO


def supports_color(stream: IO[str] | None = None, environ: Mapping[str, str] | None = None) -> bool:
    """True when ``stream`` is an interactive terminal that can render ANSI colour."""
    stream = stream if stream is not None else sys.stdout
    environ = environ if environ is not None else os.environ

    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return False
    if "NO_COLOR" in environ:
        return False
    term = environ.get("TERM", "")
    return term not in ("", "dumb")


__all__ = ["supports_color"]
