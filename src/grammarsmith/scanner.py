"""Character-level cursor for lexers.

TextCursor walks the code points of a source string and keeps the UTF-8
byte offset in step with the element index, so checkpoints restore both in
O(1) and spans come out in byte offsets with code-point columns.

Typical lexer loop:

    >>> cursor = TextCursor("12 + 3")
    >>> tokens = []
    >>> while not cursor.at_end():
    ...     start = cursor.checkpoint()
    ...     char = cursor.advance()
    ...     if char.isdigit():
    ...         cursor.advance_while(str.isdigit)
    ...         tokens.append(cursor.spanned(int(cursor.slice_since(start)), start))

Thread Safety:
Same as Cursor: one instance per thread.

"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from grammarsmith.cursor import Checkpoint, Cursor
from grammarsmith.errors import ContractViolation
from grammarsmith.lineindex import LineIndex, utf8_width
from grammarsmith.location import Position, Span, Spanned

V = TypeVar("V")


class TextCursor(Cursor[str]):
    """Cursor over the characters of a source string.

    Offsets are UTF-8 byte offsets: advancing over ``"€"`` moves the offset
    by 3 and the column by 1.

    """

    __slots__ = ("_source", "_line_index")

    def __init__(self, source: str | Sequence[str], line_index: LineIndex | None = None) -> None:
        """Initialize cursor at the start of ``source``.

        Args:
            source: Source text, or a sequence of single characters
            line_index: Existing LineIndex for the same text, to share its
                newline cache between cursors

        Raises:
            ContractViolation: If ``line_index`` was built for other text.
        """
        text = source if isinstance(source, str) else "".join(source)
        super().__init__(text)
        self._source = text
        if line_index is not None and line_index.source != text:
            raise ContractViolation("line_index was built for a different source")
        self._line_index = line_index if line_index is not None else LineIndex(text)

    def _width(self, item: str) -> int:
        return utf8_width(item)

    @property
    def source(self) -> str:
        return self._source

    @property
    def line_index(self) -> LineIndex:
        return self._line_index

    @property
    def offset(self) -> int:
        """Current UTF-8 byte offset."""
        return self._offset

    def position(self) -> Position:
        """Position of the current character."""
        return self._line_index.position(self._offset)

    def slice_since(self, checkpoint: Checkpoint) -> str:
        """Text consumed since ``checkpoint``."""
        self._check_owner(checkpoint)
        return self._source[checkpoint.index : self._index]

    def spanned(self, value: V, checkpoint: Checkpoint) -> Spanned[V]:
        """Wrap ``value`` with the span consumed since ``checkpoint``."""
        return Spanned(value, self.span_since(checkpoint))

    def _span(self, start: Checkpoint) -> Span:
        index = self._line_index
        return Span(index.position(start.offset), index.position(self._offset))


__all__ = ["TextCursor"]
