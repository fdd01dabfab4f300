"""Shared test helpers for the caret test suite."""

from __future__ import annotations

import re

from caret.diagnostic import DiagnosticSnippet, Highlight
from caret.source import InMemorySource, Span

LET_SOURCE = "let x = 1\nlet y = 2\n"

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return _ANSI.sub("", text)


def snippet(
    text: str,
    highlights: list[tuple[str, int, int]] = (),
    *,
    context: tuple[int, int] | None = None,
    name: str = "src.txt",
    message: str | None = None,
) -> DiagnosticSnippet:
    """Build a snippet over inline text; context defaults to all of it."""
    source = InMemorySource(text)
    start, end = context if context is not None else (0, len(source))
    return DiagnosticSnippet(
        source_name=name,
        source=source,
        context=Span(start, end),
        message=message,
        highlights=[Highlight(label, Span(s, e)) for label, s, e in highlights],
    )
