"""Terminal syntax colouring for snippet lines, via pygments."""

from __future__ import annotations

from collections.abc import Callable

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound


def make_highlighter(source_name: str) -> Callable[[str], str] | None:
    """Return a line highlighter for ``source_name``, or None if unknown.

    Lines are coloured one at a time, so constructs spanning lines (block
    comments, multi-line strings) are coloured per line.
    """
    try:
        lexer = get_lexer_for_filename(source_name, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return None
    formatter = TerminalFormatter()

    def _highlight(line: str) -> str:
        if not line:
            return line
        return highlight(line, lexer, formatter).rstrip("\n")

    return _highlight
