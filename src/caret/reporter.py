"""Compiler-style report rendering for diagnostics."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import IO, Protocol

from caret.chain import causes
from caret.diagnostic import Diagnostic, Severity
from caret.errors import SinkWriteFailure
from caret.highlight import make_highlighter
from caret.snippet import SnippetRenderer

logger = logging.getLogger(__name__)

INDENT = "    "
HELP_MARK = "﹦"

# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.ADVICE: "\033[1;36m",   # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


class Reporter(Protocol):
    def render(self, diagnostic: Diagnostic) -> str: ...

    def write(self, diagnostic: Diagnostic, sink: IO[str]) -> None: ...


def _header_parts(diagnostic: Diagnostic) -> tuple[str, str]:
    return f"{diagnostic.severity().title}[{diagnostic.code()}]", str(diagnostic)


def render_header(diagnostic: Diagnostic) -> str:
    tag, message = _header_parts(diagnostic)
    return f"{tag}: {message}"


def render_fallback(diagnostic: Diagnostic) -> str:
    """Bare header for when a full report cannot be produced."""
    return render_header(diagnostic)


def indent_cause(message: str, index: int | None = None) -> list[str]:
    """Indent a (possibly multi-line) cause message one level.

    With an ``index`` the first line carries it right-aligned and the
    following lines line up under the message text. Blank lines stay blank.
    """
    lines = []
    for n, part in enumerate(message.split("\n")):
        if not part:
            lines.append("")
        elif index is None:
            lines.append(f"{INDENT}{part}")
        elif n == 0:
            lines.append(f"{index:>5}: {part}")
        else:
            lines.append(f"       {part}")
    return lines


class ReportRenderer:
    """Renders a diagnostic as header, causes, snippets and help.

    With ``debug`` set the structural ``repr`` of the diagnostic is
    returned instead of the human report.
    """

    def __init__(self, *, color: bool = False, highlight: bool = True, debug: bool = False) -> None:
        self.color = color
        self.highlight = highlight
        self.debug = debug

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diagnostic: Diagnostic) -> str:
        if self.debug:
            return repr(diagnostic)

        sev = diagnostic.severity()
        color = _COLORS[sev]
        tag, message = _header_parts(diagnostic)
        lines: list[str] = [
            f"{self._c(color)}{tag}{self._c(_RESET)}{self._c(_BOLD)}: {message}{self._c(_RESET)}"
        ]

        chain = causes(diagnostic)
        if chain:
            lines.append("")
            lines.append("Caused by:")
            multiple = len(chain) > 1
            for n, message in enumerate(chain):
                lines.extend(indent_cause(message, n if multiple else None))

        snippets = diagnostic.snippets()
        if snippets:
            for snippet in snippets:
                renderer = SnippetRenderer(
                    indent=INDENT,
                    highlighter=self._highlighter(snippet.source_name),
                    paint=self._paint(sev) if self.color else None,
                )
                lines.append("")
                lines.extend(renderer.render(snippet))

        help_lines = list(diagnostic.help() or ())
        if help_lines:
            lines.append("")
            for msg in help_lines:
                lines.append(f"{self._c(_BLUE)}{HELP_MARK}{self._c(_RESET)}{msg}")

        logger.debug(
            "rendered %s[%s]: %d causes, %d snippets",
            sev.title, diagnostic.code(), len(chain), len(snippets or ()),
        )
        return "\n".join(lines)

    def write(self, diagnostic: Diagnostic, sink: IO[str]) -> None:
        """Render fully, then hand the text to ``sink`` in one write."""
        text = self.render(diagnostic)
        try:
            sink.write(text + "\n")
        except (OSError, ValueError) as e:
            raise SinkWriteFailure(f"could not write diagnostic: {e}") from e

    def _highlighter(self, source_name: str) -> Callable[[str], str] | None:
        if not (self.color and self.highlight):
            return None
        return make_highlighter(source_name)

    def _paint(self, sev: Severity) -> Callable[[str, str], str]:
        roles = {"gutter": _BLUE, "caret": _COLORS[sev]}

        def paint(role: str, text: str) -> str:
            return f"{roles[role]}{text}{_RESET}"

        return paint
