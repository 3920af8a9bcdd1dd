from __future__ import annotations

import io
import logging

from watchdiff.log import LOGGER_NAME, configure_logging


def test_configure_logging_writes_bare_messages() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)

    logging.getLogger("watchdiff.loop").info("Watching resource, waiting for changes...")

    assert stream.getvalue() == "Watching resource, waiting for changes...\n"


def test_configure_logging_is_idempotent() -> None:
    first = io.StringIO()
    second = io.StringIO()
    configure_logging(stream=first)
    logger = configure_logging(stream=second)

    logger.error("once")

    assert first.getvalue() == ""
    assert second.getvalue() == "once\n"
    assert len(logging.getLogger(LOGGER_NAME).handlers) == 1
