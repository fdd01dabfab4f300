"""Tests for the snippet renderer."""

from __future__ import annotations

import pytest

from caret.diagnostic import DiagnosticSnippet
from caret.errors import MalformedSource, SpanOutOfBounds, UnsupportedHighlight
from caret.snippet import SnippetRenderer, snippet_header
from caret.source import InMemorySource, Span
from tests.helpers import LET_SOURCE, snippet


def _lines(snip, **kwargs) -> list[str]:
    return SnippetRenderer(**kwargs).render_lines(snip)


class TestHeader:
    def test_without_message(self):
        assert snippet_header(snippet("x")) == "[src.txt]"

    def test_with_message(self):
        assert snippet_header(snippet("x", message="bad thing")) == "[src.txt] bad thing:"

    def test_render_starts_with_header_and_blank(self):
        out = SnippetRenderer().render(snippet("abc\n", message="m"))
        assert out == ["[src.txt] m:", "", "1  | abc"]


class TestLines:
    def test_highlight_on_first_line(self):
        out = _lines(snippet(LET_SOURCE, [("here", 4, 5)]))
        assert out == [
            "1  | let x = 1",
            "⫶  |     ^ here",
            "2  | let y = 2",
        ]

    def test_highlight_on_second_line(self):
        out = _lines(snippet(LET_SOURCE, [("y", 14, 15)]))
        assert out == [
            "1  | let x = 1",
            "2  | let y = 2",
            "⫶  |     ^ y",
        ]

    def test_several_highlights_keep_order(self):
        out = _lines(snippet(LET_SOURCE, [("value", 8, 9), ("name", 4, 5)]))
        assert out[1:3] == [
            "⫶  |         ^ value",
            "⫶  |     ^ name",
        ]

    def test_caret_count_matches_span_length(self):
        out = _lines(snippet("let answer = 42\n", [("name", 4, 10)]))
        assert out[1] == "⫶  |     ^^^^^^ name"

    def test_unterminated_last_line_flushed_once(self):
        out = _lines(snippet("ab\ncd"))
        assert out == ["1  | ab", "2  | cd"]

    def test_highlight_at_end_of_unterminated_line(self):
        out = _lines(snippet("ab\ncd", [("end", 3, 5)]))
        assert out == ["1  | ab", "2  | cd", "⫶  | ^^ end"]

    def test_blank_line(self):
        out = _lines(snippet("a\n\nb\n"))
        assert out == ["1  | a", "2  | ", "3  | b"]

    def test_crlf(self):
        out = _lines(snippet("ab\r\ncd", [("cd", 4, 6)]))
        assert out == ["1  | ab", "2  | cd", "⫶  | ^^ cd"]

    def test_lone_cr_stays_in_line(self):
        out = _lines(snippet("a\rb\nc"))
        assert out == ["1  | a\rb", "2  | c"]

    def test_line_numbers_across_separator_styles(self):
        out = _lines(snippet("a\nb\r\nc\nd"))
        assert out == ["1  | a", "2  | b", "3  | c", "4  | d"]

    def test_context_starting_mid_line(self):
        text = "aaa\nbbb ccc\n"
        out = _lines(snippet(text, [("c", 8, 11)], context=(8, 11)))
        assert out == ["2  | bbb ccc", "⫶  |     ^^^ c"]

    def test_wide_line_numbers(self):
        text = "".join(f"line{n}\n" for n in range(1, 12))
        start = text.index("line10")
        out = _lines(snippet(text, [("ten", start, start + 6)], context=(start, start + 6)))
        assert out == ["10 | line10", "⫶  | ^^^^^^ ten"]

    def test_alignment_counts_bytes(self):
        # "é" is two bytes, so the caret lands one column further right.
        out = _lines(snippet("é x\n", [("x", 3, 4)]))
        assert out == ["1  | é x", "⫶  |    ^ x"]

    def test_empty_source(self):
        assert _lines(snippet("")) == []

    def test_indent(self):
        out = _lines(snippet(LET_SOURCE, [("here", 4, 5)]), indent="    ")
        assert out[0] == "    1  | let x = 1"
        assert out[1] == "    ⫶  |     ^ here"

    def test_highlighter_only_touches_source_text(self):
        out = _lines(snippet("abc\n", [("b", 1, 2)]), highlighter=str.upper)
        assert out == ["1  | ABC", "⫶  |  ^ b"]

    def test_idempotent(self):
        snip = snippet(LET_SOURCE, [("here", 4, 5)])
        renderer = SnippetRenderer()
        assert renderer.render(snip) == renderer.render(snip)


class TestFailures:
    def test_multiline_highlight(self):
        with pytest.raises(UnsupportedHighlight) as exc:
            _lines(snippet(LET_SOURCE, [("across", 4, 14)]))
        assert exc.value.label == "across"
        assert exc.value.span == Span(4, 14)
        assert exc.value.line == 1

    def test_malformed_source(self):
        snip = DiagnosticSnippet(
            source_name="bin.dat",
            source=InMemorySource(b"\xff\xfe\n"),
            context=Span(0, 3),
        )
        with pytest.raises(MalformedSource, match="bin.dat"):
            _lines(snip)

    def test_context_out_of_bounds(self):
        snip = DiagnosticSnippet(
            source_name="short.txt",
            source=InMemorySource("abc"),
            context=Span(0, 99),
        )
        with pytest.raises(SpanOutOfBounds):
            _lines(snip)
