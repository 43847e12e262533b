"""Source positions and spans.

Provides Position and Span dataclasses used to tag every token and syntax
node, plus the Spanned wrapper and HasSpan protocol for caller-defined types.

Offsets are 0-based UTF-8 byte offsets; line and column are 1-based and
columns count code points, not bytes. Spans are half-open: ``end`` is
exclusive, and a zero-width span marks an insertion point.

Thread Safety:
Position, Span and Spanned are frozen (immutable) and safe to share across
threads.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar, runtime_checkable

from grammarsmith.errors import InvalidSpan

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A concrete source position.

    Ordered by offset first; for positions derived from the same input the
    line and column then agree with that order.

    Attributes:
        offset: Byte offset into the input (0-based)
        line: Line number (1-indexed)
        column: Column in code points (1-indexed)

    Examples:
            >>> Position(offset=3, line=2, column=1)
        Position(offset=3, line=2, column=1)

    """

    offset: int = 0
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        """Format as ``line:column`` for messages."""
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True, order=True)
class Span:
    """Half-open range ``[start, end)`` of source positions.

    Equality and ordering compare ``start`` then ``end``, which for positions
    of one input means ``start.offset`` then ``end.offset``.

    Raises:
        InvalidSpan: If ``start.offset > end.offset``.

    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        if self.start.offset > self.end.offset:
            raise InvalidSpan(self.start, self.end)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"

    @classmethod
    def point(cls, position: Position) -> Span:
        """Create a zero-width span at ``position``.

        Used as the insertion point of a missing-token diagnostic.
        """
        return cls(position, position)

    @property
    def length(self) -> int:
        """Width of the span in bytes."""
        return self.end.offset - self.start.offset

    @property
    def is_empty(self) -> bool:
        return self.start.offset == self.end.offset

    def merge(self, other: Span) -> Span:
        """Smallest span covering both spans.

        Example: [0, 10) merged with [10, 20) is [0, 20).
        """
        start = self.start if self.start.offset <= other.start.offset else other.start
        end = self.end if self.end.offset >= other.end.offset else other.end
        if start is self.start and end is self.end:
            return self
        return Span(start, end)

    def merge_optional(self, other: Span | None) -> Span:
        """Like merge, but returns self when other is None."""
        if other is None:
            return self
        return self.merge(other)

    def extend(self, position: Position) -> Span:
        """Grow the span so that it reaches ``position``."""
        if position.offset < self.start.offset:
            return Span(position, self.end)
        if position.offset > self.end.offset:
            return Span(self.start, position)
        return self

    def contains(self, position: Position | int) -> bool:
        """Check if a position or byte offset falls inside the span.

        Half-open: the end offset itself is not contained, so a zero-width
        span contains nothing.
        """
        offset = position if isinstance(position, int) else position.offset
        return self.start.offset <= offset < self.end.offset

    def intersects(self, other: Span) -> bool:
        """Check if the spans overlap or touch."""
        return self.start.offset <= other.end.offset and self.end.offset >= other.start.offset


@runtime_checkable
class HasSpan(Protocol):
    """Anything that carries a span: tokens, syntax nodes, Spanned values."""

    @property
    def span(self) -> Span: ...


@dataclass(frozen=True, slots=True)
class Spanned(Generic[T]):
    """A value wrapped with the span it was read from.

    Lets caller-defined token or node values carry location without
    inheriting from anything in this package.

    Examples:
            >>> tok = Spanned("ident", Span(Position(0, 1, 1), Position(5, 1, 6)))
            >>> tok.span.length
            5

    """

    value: T
    span: Span

    def map(self, func: Callable[[T], U]) -> Spanned[U]:
        """Return a new Spanned with ``func(value)`` and the same span."""
        return Spanned(func(self.value), self.span)


def merge(a: Span, b: Span) -> Span:
    """Smallest span covering ``a`` and ``b`` (commutative, idempotent)."""
    return a.merge(b)


def merge_all(spans: Iterable[Span]) -> Span | None:
    """Smallest span covering every span, or None for no spans.

    Used when a syntax node's span must cover all of its children.
    """
    result: Span | None = None
    for span in spans:
        result = span if result is None else result.merge(span)
    return result


def contains(span: Span, position: Position | int) -> bool:
    """Check if ``position`` (or a byte offset) falls inside ``span``."""
    return span.contains(position)


def span_of(value: HasSpan) -> Span:
    """Get the span of any value implementing HasSpan."""
    return value.span


__all__ = [
    "HasSpan",
    "Position",
    "Span",
    "Spanned",
    "contains",
    "merge",
    "merge_all",
    "span_of",
]
