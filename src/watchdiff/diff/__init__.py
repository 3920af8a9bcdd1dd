from watchdiff.diff.models import MISSING, Change, ChangeKind, Changelog, PathSegment
from watchdiff.diff.structural import diff

__all__ = ["MISSING", "Change", "ChangeKind", "Changelog", "PathSegment", "diff"]
