"""watchdiff: watch a Kubernetes resource and print what changed after every update."""
from __future__ import annotations

__version__ = "1.0.0"

__all__ = ["__version__"]
