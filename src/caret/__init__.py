"""caret: compiler-style rendering of structured diagnostics."""

from caret.chain import Chain
from caret.diagnostic import (
    Diagnostic,
    DiagnosticError,
    DiagnosticSnippet,
    Highlight,
    Severity,
)
from caret.errors import (
    MalformedSource,
    ReportError,
    SinkWriteFailure,
    SourceReadError,
    SourceUnavailable,
    SpanOutOfBounds,
    UnsupportedHighlight,
)
from caret.reporter import ReportRenderer, Reporter
from caret.source import InMemorySource, Source, SourceContents, SourceFile, Span

__version__ = "0.1.0"

__all__ = [
    "Chain",
    "Diagnostic",
    "DiagnosticError",
    "DiagnosticSnippet",
    "Highlight",
    "InMemorySource",
    "MalformedSource",
    "ReportError",
    "ReportRenderer",
    "Reporter",
    "SinkWriteFailure",
    "Source",
    "SourceContents",
    "SourceFile",
    "SourceReadError",
    "SourceUnavailable",
    "Span",
    "SpanOutOfBounds",
    "UnsupportedHighlight",
    "__version__",
]
