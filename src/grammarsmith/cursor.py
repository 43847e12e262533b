"""Generic backtrackable cursor over a sequence.

One Cursor implementation serves both stages of a hand-written front end:
TextCursor walks the characters of a source string while lexing, and
TokenCursor walks the lexer's tokens while parsing. Subclasses only change
how far each element moves the byte offset and how spans are measured.

Backtracking uses checkpoints rather than a stack of saved states: a
Checkpoint is a small frozen value, any number may be held at once, and
restoring one is O(1). Dropping a checkpoint needs no cleanup.

Thread Safety:
Cursor instances are not synchronized. Use one cursor per thread; several
cursors may share the same read-only input sequence.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from grammarsmith.errors import CheckpointMismatch, ContractViolation, EndOfInput
from grammarsmith.location import Position, Span
from grammarsmith.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class EndOfInputMarker:
    """Type of the EOF sentinel returned by Cursor.peek past the end."""

    __slots__ = ()
    _instance: EndOfInputMarker | None = None

    def __new__(cls) -> EndOfInputMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EOF"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "EOF"


EOF = EndOfInputMarker()

# An expectation is either a value compared with == or a predicate.
Expected = Union[Any, Callable[[Any], bool]]


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Opaque snapshot of a cursor's traversal state.

    Attributes:
        owner: Identity token of the cursor that took the checkpoint
        index: Element index at the time of the snapshot
        offset: Byte offset at the time of the snapshot (element-indexed
            cursors keep it equal to index)

    """

    owner: object
    index: int
    offset: int

    def __repr__(self) -> str:
        return f"Checkpoint(index={self.index}, offset={self.offset})"


def _matches(item: Any, expected: Expected) -> bool:
    if callable(expected) and not isinstance(expected, type):
        return bool(expected(item))
    return item == expected


class Cursor(Generic[T]):
    """Forward-biased, backtrackable traversal pointer over a sequence.

    The base class measures positions in elements: element ``i`` starts at
    offset ``i``, on line 1, column ``i + 1``.

    Usage:
            >>> cursor = Cursor(["a", "b", "c"])
            >>> mark = cursor.checkpoint()
            >>> cursor.advance(), cursor.advance()
        ('a', 'b')
            >>> cursor.span_since(mark).length
        2
            >>> cursor.restore(mark)
            >>> cursor.peek()
        'a'

    """

    __slots__ = ("_items", "_len", "_index", "_offset", "_owner")

    def __init__(self, items: Sequence[T]) -> None:
        """Initialize cursor at the start of ``items``.

        Args:
            items: Sequence to traverse (borrowed, never copied or mutated)
        """
        self._items = items
        self._len = len(items)  # Cached len(items)
        self._index = 0
        self._offset = 0
        self._owner = object()  # Identity stamped on checkpoints

    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self._index}, len={self._len})"

    def __len__(self) -> int:
        """Number of elements not yet consumed."""
        return self._len - self._index

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        if self._index >= self._len:
            raise StopIteration
        return self.advance()

    @property
    def items(self) -> Sequence[T]:
        return self._items

    @property
    def index(self) -> int:
        return self._index

    # =========================================================================
    # Traversal
    # =========================================================================

    def at_end(self) -> bool:
        """Check if every element has been consumed."""
        return self._index >= self._len

    def peek(self, k: int = 0) -> T | EndOfInputMarker:
        """Element ``k`` positions ahead without consuming it.

        Returns:
            The element, or EOF if ``k`` is negative or reaches past the
            end. Use previous() to look back.
        """
        if k < 0:
            return EOF
        pos = self._index + k
        if pos < self._len:
            return self._items[pos]
        return EOF

    def previous(self) -> T | EndOfInputMarker:
        """Most recently consumed element, or EOF if none."""
        if self._index == 0:
            return EOF
        return self._items[self._index - 1]

    def advance(self) -> T:
        """Consume and return the current element.

        Raises:
            EndOfInput: If the cursor is already at the end.
        """
        if self._index >= self._len:
            raise EndOfInput(self._index)
        item = self._items[self._index]
        self._index += 1
        self._offset += self._width(item)
        return item

    def _width(self, item: T) -> int:
        """How far one element moves the offset."""
        return 1

    # =========================================================================
    # Matching helpers
    # =========================================================================

    def check(self, expected: Expected) -> bool:
        """Check the current element without consuming it.

        Args:
            expected: Value compared with ``==``, or a predicate

        Returns:
            False at end of input.
        """
        if self._index >= self._len:
            return False
        return _matches(self._items[self._index], expected)

    def check_any(self, *expected: Expected) -> bool:
        """Check the current element against several expectations."""
        return any(self.check(e) for e in expected)

    def advance_if(self, expected: Expected) -> bool:
        """Consume the current element if it matches.

        Returns:
            True if an element was consumed.
        """
        if self.check(expected):
            self.advance()
            return True
        return False

    def advance_if_any(self, *expected: Expected) -> bool:
        """Consume the current element if it matches any expectation."""
        for e in expected:
            if self.advance_if(e):
                return True
        return False

    def advance_if_next(self, expected: Expected) -> bool:
        """Consume the current element if the element after it matches.

        Useful for two-element lookahead such as a digit followed by ``.``
        and another digit.
        """
        if self._index + 1 >= self._len:
            return False
        if _matches(self._items[self._index + 1], expected):
            self.advance()
            return True
        return False

    def advance_while(self, predicate: Callable[[T], bool]) -> list[T]:
        """Consume elements while ``predicate`` holds.

        Returns:
            The consumed elements, possibly empty.
        """
        consumed: list[T] = []
        while self._index < self._len and predicate(self._items[self._index]):
            consumed.append(self.advance())
        return consumed

    def skip_until(self, *stop: Expected) -> Span | None:
        """Discard elements until one matching ``stop`` (or end of input).

        Used for error recovery: skip to a synchronization point and report
        the skipped region.

        Returns:
            Span of the skipped elements, or None if nothing was skipped.
        """
        mark = self.checkpoint()
        while self._index < self._len and not self.check_any(*stop):
            self.advance()
        if self._index == mark.index:
            return None
        return self.span_since(mark)

    # =========================================================================
    # Backtracking
    # =========================================================================

    def checkpoint(self) -> Checkpoint:
        """Snapshot the traversal state in O(1)."""
        return Checkpoint(self._owner, self._index, self._offset)

    def _check_owner(self, checkpoint: Checkpoint) -> None:
        if checkpoint.owner is not self._owner:
            logger.debug("rejecting %r on %r", checkpoint, self)
            raise CheckpointMismatch(checkpoint)

    def restore(self, checkpoint: Checkpoint) -> None:
        """Reset to a checkpoint taken on this cursor, in O(1).

        Raises:
            CheckpointMismatch: If the checkpoint came from another cursor.
        """
        self._check_owner(checkpoint)
        self._index = checkpoint.index
        self._offset = checkpoint.offset

    def span_since(self, checkpoint: Checkpoint) -> Span:
        """Span covering everything consumed since ``checkpoint``.

        Raises:
            CheckpointMismatch: If the checkpoint came from another cursor.
            ContractViolation: If the checkpoint is ahead of the cursor.
        """
        self._check_owner(checkpoint)
        if checkpoint.index > self._index:
            raise ContractViolation(
                f"{checkpoint!r} is ahead of the cursor at index {self._index}"
            )
        return self._span(checkpoint)

    def _span(self, start: Checkpoint) -> Span:
        return Span(
            Position(offset=start.index, line=1, column=start.index + 1),
            Position(offset=self._index, line=1, column=self._index + 1),
        )


__all__ = ["EOF", "Checkpoint", "Cursor", "EndOfInputMarker", "Expected"]
