"""Parsing of Server-Sent Events carrying JSON payloads."""

from __future__ import annotations

import codecs
import json
from collections import deque
from collections.abc import Iterable, Iterator
from typing import Any

_DATA_PREFIX = "data: "


class SseError(Exception):
    """Raised for a malformed event or a failure of the underlying stream."""


class SseStream:
    """Iterate over the JSON payloads of ``data:`` lines in a chunked byte stream.

    A malformed event raises :class:`SseError`; iteration may continue afterwards.
    Other SSE fields and blank lines are ignored, and an unterminated final line
    is discarded.
    """

    def __init__(self, chunks: Iterable[bytes | str]) -> None:
        self._chunks = iter(chunks)
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""
        self._pending: deque[Any] = deque()
        self._exhausted = False

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        while True:
            if self._pending:
                item = self._pending.popleft()
                if isinstance(item, SseError):
                    raise item
                return item
            if self._exhausted:
                raise StopIteration
            try:
                chunk = next(self._chunks)
            except StopIteration:
                self._exhausted = True
                continue
            except Exception as exc:
                raise SseError(f"Stream error: {exc}") from exc
            self._feed(chunk)

    def _feed(self, chunk: bytes | str) -> None:
        if isinstance(chunk, str):
            text = chunk
        else:
            try:
                text = self._decoder.decode(bytes(chunk))
            except UnicodeDecodeError as exc:
                raise SseError(f"Invalid UTF-8: {exc}") from exc
        self._buffer += text
        self._drain_lines()

    def _drain_lines(self) -> None:
        while "\n" in self._buffer:
            line, _, self._buffer = self._buffer.partition("\n")
            line = line.rstrip("\r")
            if not line.startswith(_DATA_PREFIX):
                continue
            data = line[len(_DATA_PREFIX):]
            try:
                self._pending.append(json.loads(data))
            except json.JSONDecodeError as exc:
                self._pending.append(SseError(f"Failed to parse JSON: {exc}"))


def parse_sse_stream(stream: Iterable[bytes | str]) -> SseStream:
    """Wrap a byte-chunk iterable in an :class:`SseStream`."""
    return SseStream(stream)