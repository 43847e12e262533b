"""Token-level cursor for parsers.

TokenCursor walks a sequence of caller-defined tokens. The only requirement
on a token is a ``span`` attribute (see HasSpan); token kinds, payloads and
the end-of-file convention all stay with the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from grammarsmith.cursor import Checkpoint, Cursor
from grammarsmith.location import HasSpan, Position, Span

TokenT = TypeVar("TokenT", bound=HasSpan)

_ORIGIN = Position(offset=0, line=1, column=1)


class TokenCursor(Cursor[TokenT]):
    """Cursor over spanned tokens.

    span_since covers the first through the last token consumed since the
    checkpoint. Gaps between tokens (skipped whitespace, comments) inside
    that range are included; trailing gaps are not.

    """

    __slots__ = ()

    def __init__(self, tokens: Sequence[TokenT]) -> None:
        super().__init__(tokens)

    def _anchor(self) -> Position:
        """Insertion point for a zero-width span at the current index."""
        if self._index < self._len:
            return self._items[self._index].span.start
        if self._len:
            return self._items[self._len - 1].span.end
        return _ORIGIN

    def peek_span(self, k: int = 0) -> Span:
        """Span of the token ``k`` ahead.

        Past the end this is a zero-width span after the last token, the
        natural place to report a missing token.
        """
        pos = self._index + k
        if 0 <= pos < self._len:
            return self._items[pos].span
        if self._len:
            return Span.point(self._items[self._len - 1].span.end)
        return Span.point(_ORIGIN)

    def _span(self, start: Checkpoint) -> Span:
        if start.index == self._index:
            return Span.point(self._anchor())
        first = self._items[start.index].span
        last = self._items[self._index - 1].span
        return first.merge(last)


__all__ = ["TokenCursor"]
