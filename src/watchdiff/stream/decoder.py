from __future__ import annotations

import codecs
import json
from collections.abc import Iterator
from dataclasses import dataclass
from typing import IO, Any

from watchdiff.constants import DEFAULT_CHUNK_SIZE
from watchdiff.errors import StreamDecodeError

_WHITESPACE = " \t\r\n"
_PREVIEW_CHARS = 80


@dataclass(slots=True)
class DecodedDocument:
    index: int
    value: Any = None
    error: StreamDecodeError | None = None
    raw: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


def _preview(text: str) -> str:
    text = text.strip()
    if len(text) <= _PREVIEW_CHARS:
        return text
    return text[:_PREVIEW_CHARS] + "..."


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WHITESPACE:
        pos += 1
    return pos


def scan_object(text: str, start: int) -> int | None:
    """Return the end offset of the bracketed value opening at ``start``.

    Strings and escapes are honoured so braces inside string literals do not
    count. ``None`` means the buffer ends before the value is closed.
    """
    depth = 0
    in_string = False
    escaped = False
    for pos in range(start, len(text)):
        char = text[pos]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
            if depth <= 0:
                return pos + 1
    return None


def _line_start_object(text: str) -> int:
    """Offset of the first ``{`` at column zero after ``text[0]``, or ``-1``.

    ``kubectl -o=json`` prints every top-level object starting at column zero
    and indents nested ones, so such a brace inside an unterminated frame marks
    where the next object begins.
    """
    found = text.find("\n{", 1)
    return -1 if found == -1 else found + 1


def _parses(frame: str) -> bool:
    try:
        json.loads(frame)
    except (json.JSONDecodeError, RecursionError):
        return False
    return True


def _first_decodable_object(text: str) -> int:
    """Offset of the first later ``{`` outside a string that opens a valid object."""
    in_string = False
    escaped = False
    for pos in range(1, len(text)):
        char = text[pos]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            end = scan_object(text, pos)
            if end is not None and _parses(text[pos:end]):
                return pos
    return -1


class StreamDecoder:
    """Lazily split a byte stream of back-to-back JSON objects into documents.

    The stream has no framing beyond the objects themselves, so bytes are read
    incrementally and each object boundary is found by bracket scanning before
    the frame is handed to :mod:`json`. A frame that does not parse, or text
    between objects that is not an object at all, is yielded as a failed
    :class:`DecodedDocument` and decoding resumes at the next boundary.
    An object whose brackets never balance is cut off where the next
    top-level object starts.
    """

    def __init__(self, stream: IO[bytes] | IO[str], chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._stream = stream
        self._chunk_size = chunk_size
        self._text_decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._eof = False
        self._started = False
        self._index = 0

    def __iter__(self) -> Iterator[DecodedDocument]:
        if self._started:
            raise RuntimeError("StreamDecoder can only be iterated once")
        self._started = True
        return self._documents()

    def _read_more(self) -> bool:
        if self._eof:
            return False
        read = getattr(self._stream, "read1", None) or self._stream.read
        chunk = read(self._chunk_size)
        if not chunk:
            self._eof = True
            self._buffer += self._text_decoder.decode(b"", final=True)
            return False
        if isinstance(chunk, str):
            self._buffer += chunk
        else:
            self._buffer += self._text_decoder.decode(chunk)
        return True

    def _next_document(
        self,
        value: Any = None,
        error: StreamDecodeError | None = None,
        raw: str = "",
    ) -> DecodedDocument:
        document = DecodedDocument(index=self._index, value=value, error=error, raw=raw)
        self._index += 1
        return document

    def _skip_to(self, offset: int, message: str) -> DecodedDocument:
        skipped, self._buffer = self._buffer[:offset], self._buffer[offset:]
        return self._next_document(
            error=StreamDecodeError(message, details={"length": len(skipped)}),
            raw=skipped,
        )

    def _documents(self) -> Iterator[DecodedDocument]:
        while True:
            start = _skip_whitespace(self._buffer, 0)
            self._buffer = self._buffer[start:]

            if not self._buffer:
                if not self._read_more():
                    return
                continue

            if self._buffer[0] != "{":
                boundary = self._buffer.find("{")
                if boundary == -1 and self._read_more():
                    continue
                garbage = self._buffer if boundary == -1 else self._buffer[:boundary]
                self._buffer = "" if boundary == -1 else self._buffer[boundary:]
                yield self._next_document(
                    error=StreamDecodeError(
                        f"Unexpected data between objects: {_preview(garbage)!r}",
                        details={"length": len(garbage)},
                    ),
                    raw=garbage,
                )
                continue

            end = scan_object(self._buffer, 0)
            if end is None:
                restart = _line_start_object(self._buffer)
                if restart != -1:
                    yield self._skip_to(restart, "Object truncated before the next object started")
                    continue
                if self._read_more():
                    continue
                restart = _first_decodable_object(self._buffer)
                if restart != -1:
                    yield self._skip_to(restart, "Object truncated before the next object started")
                    continue
                yield self._skip_to(len(self._buffer), "Stream ended inside an incomplete object")
                return

            frame = self._buffer[:end]
            try:
                value = json.loads(frame)
            except json.JSONDecodeError as exc:
                restart = _line_start_object(frame)
                if restart != -1:
                    yield self._skip_to(restart, f"{exc.msg} at line {exc.lineno} column {exc.colno}")
                    continue
                self._buffer = self._buffer[end:]
                yield self._next_document(
                    error=StreamDecodeError(
                        f"{exc.msg} at line {exc.lineno} column {exc.colno}",
                        details={"line": exc.lineno, "column": exc.colno},
                    ),
                    raw=frame,
                )
                continue
            except RecursionError:
                self._buffer = self._buffer[end:]
                yield self._next_document(
                    error=StreamDecodeError(
                        "Object nesting is too deep to decode",
                        details={"length": len(frame)},
                    ),
                    raw=frame,
                )
                continue
            self._buffer = self._buffer[end:]
            yield self._next_document(value=value, raw=frame)


def iter_documents(stream: IO[bytes] | IO[str], chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[DecodedDocument]:
    return iter(StreamDecoder(stream, chunk_size=chunk_size))


__all__ = ["DecodedDocument", "StreamDecoder", "iter_documents", "scan_object"]
