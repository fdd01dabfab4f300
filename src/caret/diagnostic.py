"""Diagnostic data model and the capability renderers consume."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, runtime_checkable

from caret.source import Source, Span


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    ADVICE = "advice"

    @property
    def title(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class Highlight:
    """A labelled range to underline inside a snippet."""

    label: str
    span: Span


@dataclass(frozen=True)
class DiagnosticSnippet:
    """An excerpt of a named source with labelled highlights.

    Every highlight span must lie inside ``context``.
    """

    source_name: str
    source: Source
    context: Span
    message: str | None = None
    highlights: Sequence[Highlight] = field(default_factory=tuple)


@runtime_checkable
class Diagnostic(Protocol):
    """What a renderer needs from a diagnostic.

    ``str(diagnostic)`` is the display message. The cause chain follows the
    usual exception linkage (``__cause__`` / ``__context__``).
    """

    def severity(self) -> Severity: ...

    def code(self) -> str: ...

    def snippets(self) -> Sequence[DiagnosticSnippet] | None: ...

    def help(self) -> Iterable[str] | None: ...


class DiagnosticError(Exception):
    """Stock diagnostic: an exception carrying everything a report needs."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        severity: Severity = Severity.ERROR,
        snippets: Sequence[DiagnosticSnippet] | None = None,
        help: Sequence[str] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self._code = code
        self._severity = severity
        self._snippets = list(snippets) if snippets else None
        self._help = list(help) if help else None
        if cause is not None:
            self.__cause__ = cause

    def severity(self) -> Severity:
        return self._severity

    def code(self) -> str:
        return self._code

    def snippets(self) -> Sequence[DiagnosticSnippet] | None:
        return self._snippets

    def help(self) -> Iterable[str] | None:
        return self._help

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(severity={self._severity!r}, "
            f"code={self._code!r}, message={self.message!r}, "
            f"cause={self.__cause__!r}, snippets={self._snippets!r}, "
            f"help={self._help!r})"
        )
