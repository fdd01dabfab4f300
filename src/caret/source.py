"""Byte-offset spans and the readers that turn them into source lines."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from caret.errors import SourceUnavailable, SpanOutOfBounds


@dataclass(frozen=True)
class Span:
    """A half-open byte range ``[start, end)`` within a source."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start

    def len(self) -> int:
        return self.end - self.start

    def contains(self, other: Span) -> bool:
        return self.start <= other.start and other.end <= self.end

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class SourceContents:
    """Full lines covering a span.

    ``data[0]`` sits at absolute byte ``offset``, which is the start of the
    line holding the span start. ``line`` and ``column`` are the 1-based
    position of the span start; the column counts bytes.
    """

    data: bytes
    line: int
    column: int
    offset: int


@runtime_checkable
class Source(Protocol):
    def read_span(self, span: Span) -> SourceContents: ...


class InMemorySource:
    """A source held entirely in memory.

    LF and CRLF end a line. A lone CR does not.
    """

    def __init__(self, text: str | bytes) -> None:
        self.data = text.encode("utf-8") if isinstance(text, str) else bytes(text)

    def __len__(self) -> int:
        return len(self.data)

    def read_span(self, span: Span) -> SourceContents:
        data = self.data
        if span.end > len(data):
            raise SpanOutOfBounds(span, len(data))

        line_start = data.rfind(b"\n", 0, span.start) + 1
        # The last byte the span touches decides the last line.
        last = span.end - 1 if span.end > span.start else span.start
        newline = data.find(b"\n", last)
        line_end = len(data) if newline == -1 else newline + 1

        return SourceContents(
            data=data[line_start:line_end],
            line=data.count(b"\n", 0, line_start) + 1,
            column=span.start - line_start + 1,
            offset=line_start,
        )


class SourceFile:
    """A source file on disk, read once on first use."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._source: InMemorySource | None = None

    def _load(self) -> InMemorySource:
        if self._source is None:
            try:
                self._source = InMemorySource(self.path.read_bytes())
            except OSError as e:
                raise SourceUnavailable(f"cannot read {self.path}: {e.strerror}") from e
        return self._source

    def read_span(self, span: Span) -> SourceContents:
        return self._load().read_span(span)

    def __repr__(self) -> str:
        return f"SourceFile({str(self.path)!r})"


def position_at(source: Source, offset: int) -> tuple[int, int]:
    """Return the 1-based (line, byte column) of an absolute offset."""
    contents = source.read_span(Span(offset, offset))
    return contents.line, contents.column
