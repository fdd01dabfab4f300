"""Failures raised while turning a diagnostic into text."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from caret.source import Span


class ReportError(Exception):
    """A diagnostic could not be rendered. Nothing usable was produced."""


class MalformedSource(ReportError):
    """Source bytes for a snippet are not valid UTF-8."""

    def __init__(self, source_name: str, reason: str) -> None:
        self.source_name = source_name
        self.reason = reason
        super().__init__(f"[{source_name}] source is not valid UTF-8: {reason}")


class UnsupportedHighlight(ReportError):
    """A highlight runs past the end of the line it starts on."""

    def __init__(self, label: str, span: Span, line: int) -> None:
        self.label = label
        self.span = span
        self.line = line
        super().__init__(
            f"highlight {label!r} at {span} starts on line {line} "
            "and spans multiple lines"
        )


class SinkWriteFailure(ReportError):
    """The output destination rejected the rendered text."""


class SourceReadError(ReportError):
    """A source could not supply the text for a span."""


class SpanOutOfBounds(SourceReadError):
    def __init__(self, span: Span, size: int) -> None:
        self.span = span
        self.size = size
        super().__init__(f"span {span} is outside source of {size} bytes")


class SourceUnavailable(SourceReadError):
    pass
