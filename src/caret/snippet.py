"""Annotated source excerpts with caret underlines.

A snippet's context is scanned once, front to back. Line numbers, the
running byte offset and the offset where the current line began all come
from that single pass, and caret positions are derived from the same
counters so the underline always matches the printed line.

Caret columns are byte distances from the line start. Non-ASCII text in
front of a highlight therefore shifts the carets to the right on screen.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from caret.diagnostic import DiagnosticSnippet
from caret.errors import MalformedSource, UnsupportedHighlight

logger = logging.getLogger(__name__)

GUTTER_MARK = "⫶"


def _utf8_len(char: str) -> int:
    cp = ord(char)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


def snippet_header(snippet: DiagnosticSnippet) -> str:
    if snippet.message:
        return f"[{snippet.source_name}] {snippet.message}:"
    return f"[{snippet.source_name}]"


class SnippetRenderer:
    """Renders one snippet into output lines.

    ``indent`` prefixes every numbered and annotation line. ``highlighter``
    is applied to the visible text of source lines only. ``paint`` wraps
    gutter marks and carets with colour codes when set.
    """

    def __init__(
        self,
        *,
        indent: str = "",
        highlighter: Callable[[str], str] | None = None,
        paint: Callable[[str, str], str] | None = None,
    ) -> None:
        self.indent = indent
        self.highlighter = highlighter
        self.paint = paint

    def _p(self, role: str, text: str) -> str:
        return self.paint(role, text) if self.paint else text

    def render(self, snippet: DiagnosticSnippet) -> list[str]:
        """Header, blank separator, then one block per source line."""
        return [snippet_header(snippet), "", *self.render_lines(snippet)]

    def render_lines(self, snippet: DiagnosticSnippet) -> list[str]:
        contents = snippet.source.read_span(snippet.context)
        try:
            text = contents.data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedSource(snippet.source_name, str(e)) from e

        logger.debug(
            "rendering [%s] context %s: %d bytes from line %d",
            snippet.source_name, snippet.context, len(contents.data), contents.line,
        )

        out: list[str] = []
        line = contents.line
        offset = contents.offset
        line_offset = offset
        buf: list[str] = []
        i = 0
        n = len(text)

        while i < n:
            char = text[i]
            i += 1
            offset += _utf8_len(char)
            broke = False

            if char == "\r" and i < n and text[i] == "\n":
                i += 1
                offset += 1
                broke = True
            elif char == "\n":
                broke = True
            else:
                buf.append(char)

            if broke or i == n:
                # Last byte a single-line highlight may reach.
                limit = offset - 1 if broke else offset
                self._flush(out, snippet, "".join(buf), line, line_offset, offset, limit)
                buf.clear()
                line += 1
                line_offset = offset

        return out

    def _flush(
        self,
        out: list[str],
        snippet: DiagnosticSnippet,
        text: str,
        line: int,
        line_offset: int,
        offset: int,
        limit: int,
    ) -> None:
        if self.highlighter is not None:
            text = self.highlighter(text)
        out.append(f"{self.indent}{self._p('gutter', f'{line:<2} |')} {text}")

        for highlight in snippet.highlights:
            start = highlight.span.start
            end = highlight.span.end
            if line_offset <= start and end <= limit:
                carets = "^" * highlight.span.len()
                out.append(
                    f"{self.indent}{self._p('gutter', f'{GUTTER_MARK:<2} |')} "
                    f"{' ' * (start - line_offset)}{self._p('caret', carets)} "
                    f"{highlight.label}"
                )
            elif line_offset <= start < offset:
                raise UnsupportedHighlight(highlight.label, highlight.span, line)
