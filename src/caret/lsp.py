"""Diagnostics for editors: conversion to LSP types and publishing via pygls."""

from __future__ import annotations

from lsprotocol import types as lsp
from pygls.lsp.server import LanguageServer

from caret.chain import causes
from caret.diagnostic import Diagnostic, Severity
from caret.source import Source, Span

_SEVERITY_MAP = {
    Severity.ERROR: lsp.DiagnosticSeverity.Error,
    Severity.WARNING: lsp.DiagnosticSeverity.Warning,
    Severity.ADVICE: lsp.DiagnosticSeverity.Information,
}


def _position(source: Source, offset: int) -> lsp.Position:
    """0-based LSP position of a byte offset, character in UTF-16 units."""
    contents = source.read_span(Span(offset, offset))
    prefix = contents.data[: contents.column - 1].decode("utf-8", errors="replace")
    return lsp.Position(
        line=contents.line - 1,
        character=len(prefix.encode("utf-16-le")) // 2,
    )


def span_to_range(source: Source, span: Span) -> lsp.Range:
    """Convert a byte-offset span to a 0-indexed LSP Range."""
    return lsp.Range(start=_position(source, span.start), end=_position(source, span.end))


def to_lsp(diagnostic: Diagnostic) -> list[lsp.Diagnostic]:
    """One LSP diagnostic per highlight, or a single one at 0:0 without any."""
    sev = _SEVERITY_MAP[diagnostic.severity()]
    code = diagnostic.code()
    msg = f"[{code}] {diagnostic}"
    chain = causes(diagnostic)
    if chain:
        msg += "\n" + "\n".join(f"caused by: {c}" for c in chain)

    out = []
    for snippet in diagnostic.snippets() or ():
        for hl in snippet.highlights:
            message = f"{msg}\n{hl.label}" if hl.label else msg
            out.append(lsp.Diagnostic(
                range=span_to_range(snippet.source, hl.span),
                severity=sev, source="caret", code=code, message=message,
            ))
    if not out:
        out.append(lsp.Diagnostic(
            range=lsp.Range(start=lsp.Position(0, 0), end=lsp.Position(0, 0)),
            severity=sev, source="caret", code=code, message=msg,
        ))
    return out


def publish(server: LanguageServer, uri: str, diagnostics: list[Diagnostic]) -> None:
    """Publish ``diagnostics`` for the document at ``uri``."""
    items = [d for diag in diagnostics for d in to_lsp(diag)]
    server.text_document_publish_diagnostics(lsp.PublishDiagnosticsParams(
        uri=uri, diagnostics=items,
    ))


def create_server(name: str = "caret-lsp", version: str = "0.1.0") -> LanguageServer:
    """A pygls server that ``publish`` can push diagnostics through."""
    return LanguageServer(name, version, text_document_sync_kind=lsp.TextDocumentSyncKind.Full)
