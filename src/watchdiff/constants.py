from __future__ import annotations

# Value summarization limits used by report rendering.
MAX_VALUE_TEXT = 100
TRUNCATED_VALUE_TEXT = 97
ELLIPSIS = "..."
MAX_SUMMARY_KEYS = 3

SEPARATOR_WIDTH = 60
CLOSING_SEPARATOR_WIDTH = 61
DEFAULT_CHUNK_SIZE = 65536

# Integral floats below this magnitude render without a fractional part.
MAX_EXACT_FLOAT = 1e21

DEFAULT_KUBECTL = "kubectl"
CONFIG_ENV_VAR = "WATCHDIFF_CONFIG"

# Seconds to wait for the watch process after SIGTERM before killing it.
STOP_GRACE_SECONDS = 5.0

EXIT_SUCCESS = 0
EXIT_INTERNAL_ERROR = 2
EXIT_INTERRUPTED = 130
