from watchdiff.report.renderers import format_changelog, summarize_value

__all__ = ["format_changelog", "summarize_value"]
