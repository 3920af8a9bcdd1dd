from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from watchdiff.diff import diff
from watchdiff.errors import InvalidValueError, WatchDiffError
from watchdiff.normalize import Normalizer, identity_normalizer
from watchdiff.report import format_changelog
from watchdiff.snapshot import SnapshotManager
from watchdiff.stream import DecodedDocument
from watchdiff.values import validate_value

logger = logging.getLogger(__name__)

WAITING_MESSAGE = "Watching resource, waiting for changes..."


@dataclass(slots=True)
class LoopStats:
    documents: int = 0
    reports: int = 0
    errors: int = 0


class WatchLoop:
    """Decode -> normalize -> diff against baseline -> render -> emit, one item at a time.

    A failure on one item is logged once and the item is skipped; the baseline
    is only advanced after a report has been emitted.
    """

    def __init__(
        self,
        snapshots: SnapshotManager,
        emit: Callable[[str], None],
        normalizer: Normalizer = identity_normalizer,
        colorize: bool = False,
    ) -> None:
        self.snapshots = snapshots
        self.emit = emit
        self.normalizer = normalizer
        self.colorize = colorize
        self.stats = LoopStats()

    def _fail(self, prefix: str, exc: Exception) -> None:
        self.stats.errors += 1
        logger.error("%s: %s", prefix, exc)

    def process(self, document: DecodedDocument) -> None:
        self.stats.documents += 1
        if document.error is not None:
            self._fail("Error decoding JSON", document.error)
            return

        try:
            value = self.normalizer(document.value)
            validate_value(value)
            request = self.snapshots.consider(value)
        except WatchDiffError as exc:
            self._fail("Error processing object", exc)
            return
        except RecursionError:
            self._fail("Error processing object", InvalidValueError("Object nesting is too deep"))
            return

        if request is None:
            logger.info(WAITING_MESSAGE)
            return

        try:
            changelog = diff(request.baseline, request.current)
            report = format_changelog(changelog, colorize=self.colorize)
        except WatchDiffError as exc:
            self._fail("Error computing diff", exc)
            return
        except RecursionError:
            self._fail("Error computing diff", InvalidValueError("Object nesting is too deep"))
            return

        self.emit(report)
        self.stats.reports += 1
        self.snapshots.commit(request)

    def run(self, documents: Iterable[DecodedDocument]) -> LoopStats:
        for document in documents:
            self.process(document)
        return self.stats


__all__ = ["WAITING_MESSAGE", "LoopStats", "WatchLoop"]
