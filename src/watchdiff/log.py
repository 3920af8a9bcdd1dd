from __future__ import annotations

import logging
import sys
from typing import IO

LOGGER_NAME = "watchdiff"
_HANDLER_NAME = "watchdiff-stderr"


def configure_logging(level: int = logging.INFO, stream: IO[str] | None = None) -> logging.Logger:
    """Send package log records to stderr as bare messages, one line each.

    StreamHandler flushes after every record, so diagnostics interleave with
    report output in arrival order. Calling this again replaces the handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["LOGGER_NAME", "configure_logging"]
