"""Build diagnostics from JSON documents.

A document looks like::

    {
      "severity": "error",
      "code": "E001",
      "message": "unexpected token",
      "causes": ["while parsing `let`"],
      "snippets": [
        {
          "name": "main.txt",
          "text": "let x = 1\\n",
          "context": [0, 10],
          "message": "here",
          "highlights": [{"label": "this one", "span": [4, 5]}]
        }
      ],
      "help": ["remove it"]
    }

A snippet takes either inline ``text`` or a ``file`` path, resolved
relative to the document. ``context`` defaults to the whole source.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from caret.diagnostic import DiagnosticError, DiagnosticSnippet, Highlight, Severity
from caret.source import InMemorySource, Source, SourceFile, Span


def load_diagnostic(path: Path) -> DiagnosticError:
    """Read a JSON diagnostic document. Raises ValueError on a bad shape."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return diagnostic_from_dict(data, path.parent)


def _span(value: Any, what: str) -> Span:
    if (
        not isinstance(value, list)
        or len(value) != 2
        or not all(isinstance(v, int) for v in value)
    ):
        raise ValueError(f"{what} must be a [start, end] pair of integers")
    return Span(value[0], value[1])


def _severity(value: Any) -> Severity:
    try:
        return Severity(str(value).lower())
    except ValueError:
        names = ", ".join(s.value for s in Severity)
        raise ValueError(f"unknown severity {value!r} (expected one of {names})") from None


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list")
    return value


def _object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object")
    return value


def _snippet(data: dict[str, Any], base_dir: Path) -> DiagnosticSnippet:
    data = _object(data, "snippet")
    source: Source
    if "text" in data:
        if not isinstance(data["text"], str):
            raise ValueError("snippet 'text' must be a string")
        source = InMemorySource(data["text"])
        size = len(source)
        name = data.get("name", "<input>")
    elif "file" in data:
        if not isinstance(data["file"], str):
            raise ValueError("snippet 'file' must be a string")
        path = base_dir / data["file"]
        source = SourceFile(path)
        size = path.stat().st_size if path.is_file() else 0
        name = data.get("name", data["file"])
    else:
        raise ValueError("snippet needs either 'text' or 'file'")

    context = _span(data["context"], "context") if "context" in data else Span(0, size)
    highlights = []
    for h in _list(data, "highlights"):
        h = _object(h, "highlight")
        highlights.append(Highlight(
            label=str(h.get("label", "")),
            span=_span(h.get("span"), "highlight span"),
        ))
    return DiagnosticSnippet(
        source_name=name,
        source=source,
        context=context,
        message=data.get("message"),
        highlights=highlights,
    )


def diagnostic_from_dict(data: dict[str, Any], base_dir: Path | None = None) -> DiagnosticError:
    if not isinstance(data, dict):
        raise ValueError("diagnostic document must be a JSON object")
    for key in ("code", "message"):
        if key not in data:
            raise ValueError(f"diagnostic is missing '{key}'")

    base = base_dir or Path.cwd()

    # Innermost cause last, so link from the bottom up.
    cause: Exception | None = None
    for message in reversed(_list(data, "causes")):
        err = Exception(str(message))
        err.__cause__ = cause
        cause = err

    return DiagnosticError(
        data["message"],
        code=str(data["code"]),
        severity=_severity(data.get("severity", "error")),
        snippets=[_snippet(s, base) for s in _list(data, "snippets")],
        help=[str(h) for h in _list(data, "help")],
        cause=cause,
    )
