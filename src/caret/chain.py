"""Walk the underlying causes of an error."""

from __future__ import annotations

from collections.abc import Iterator


class Chain:
    """Iterate ``error`` and each error underneath it, outermost first.

    An explicit ``__cause__`` wins over an implicit ``__context__``; a
    suppressed context is not followed. The walk is single-use.
    """

    def __init__(self, error: BaseException | None) -> None:
        self._next = error
        self._seen: set[int] = set()

    def __iter__(self) -> Iterator[BaseException]:
        return self

    def __next__(self) -> BaseException:
        error = self._next
        if error is None or id(error) in self._seen:
            self._next = None
            raise StopIteration
        self._seen.add(id(error))
        self._next = underlying(error)
        return error


def underlying(error: BaseException) -> BaseException | None:
    """Return the error directly underneath ``error``, if any."""
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


def causes(diagnostic: object) -> list[str]:
    """Messages of every cause below ``diagnostic``, outermost first."""
    if isinstance(diagnostic, BaseException):
        root = underlying(diagnostic)
    else:
        root = getattr(diagnostic, "__cause__", None)
    return [str(e) for e in Chain(root)]
