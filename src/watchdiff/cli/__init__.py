"""watchdiff CLI: Typer command wiring the watch source to the diff loop."""
from __future__ import annotations


def __getattr__(name: str) -> object:
    if name == "app":
        from watchdiff.cli.commands import app
        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["app"]
