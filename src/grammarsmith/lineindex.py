"""Byte offset to line/column conversion.

LineIndex maps UTF-8 byte offsets of a source string to Position values.
Columns count code points, so a diagnostic on a line containing multi-byte
characters still points at the visually correct column.

Line breaks:
- ``\\n`` ends a line.
- ``\\r\\n`` counts as one line break; the ``\\r`` is the last column of
  its line.
- A lone ``\\r`` is not a line break.

The newline table is built lazily and only forward. Lookups of offsets
that were already scanned are a bisect over the known line starts; lookups
further ahead extend the table, so a lexer moving forward pays O(1)
amortized per byte. position_at() computes the same answer from scratch.

Thread Safety:
LineIndex mutates its newline cache on lookup. Use one instance per
thread, or share a LineIndex that has been fully scanned (line_count).

"""

from __future__ import annotations

from bisect import bisect_right

from grammarsmith.errors import ContractViolation, OffsetOutOfRange
from grammarsmith.location import Position

_CONTINUATION_MASK = 0xC0
_CONTINUATION_BITS = 0x80


def utf8_width(char: str) -> int:
    """UTF-8 byte width of a single code point.

    Lone surrogates count as 3 bytes, matching the ``surrogatepass``
    encoding used by LineIndex.
    """
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def encode_source(source: str) -> bytes:
    """Encode source text the way every offset in this package is measured."""
    return source.encode("utf-8", "surrogatepass")


def _check_offset(data: bytes, offset: int) -> None:
    length = len(data)
    if offset < 0 or offset > length:
        raise OffsetOutOfRange(offset, length)
    if offset < length and data[offset] & _CONTINUATION_MASK == _CONTINUATION_BITS:
        raise ContractViolation(f"offset {offset} is inside a multi-byte character")


def _decode(chunk: bytes) -> str:
    return chunk.decode("utf-8", "surrogatepass")


def position_at(source: str, offset: int) -> Position:
    """Compute the Position of ``offset`` in ``source`` without caching.

    Args:
        source: Source text
        offset: UTF-8 byte offset, ``0 <= offset <= len(encoded source)``

    Returns:
        Position with 1-based line and code-point column.

    Raises:
        OffsetOutOfRange: If offset lies outside the input.
        ContractViolation: If offset splits a multi-byte character.

    """
    data = encode_source(source)
    _check_offset(data, offset)
    line = data.count(b"\n", 0, offset) + 1
    line_start = data.rfind(b"\n", 0, offset) + 1
    column = len(_decode(data[line_start:offset])) + 1
    return Position(offset=offset, line=line, column=column)


class LineIndex:
    """Incrementally built newline table over one source string.

    Usage:
            >>> index = LineIndex("ab\\ncd")
            >>> index.position(3)
        Position(offset=3, line=2, column=1)

    """

    __slots__ = (
        "_source",
        "_data",
        "_len",
        "_line_starts",  # Byte offsets of known line starts, ascending
        "_scanned",  # Bytes before this offset have been searched for newlines
    )

    def __init__(self, source: str) -> None:
        self._source = source
        self._data = encode_source(source)
        self._len = len(self._data)
        self._line_starts: list[int] = [0]
        self._scanned = 0

    def __repr__(self) -> str:
        return f"LineIndex({self._len} bytes, {len(self._line_starts)} lines scanned)"

    @property
    def source(self) -> str:
        return self._source

    @property
    def data(self) -> bytes:
        """UTF-8 encoding of the source."""
        return self._data

    @property
    def len_bytes(self) -> int:
        return self._len

    @property
    def line_count(self) -> int:
        """Total number of lines (scans the whole input)."""
        while self._scan_line():
            pass
        return len(self._line_starts)

    # =========================================================================
    # Newline table
    # =========================================================================

    def _scan_to(self, offset: int) -> None:
        """Record every line start at or before ``offset``."""
        data = self._data
        starts = self._line_starts
        while self._scanned < offset:
            nl = data.find(b"\n", self._scanned, offset)
            if nl == -1:
                self._scanned = offset
                return
            starts.append(nl + 1)
            self._scanned = nl + 1

    def _scan_line(self) -> bool:
        """Discover the next line start.

        Returns:
            False once the whole input has been scanned.
        """
        if self._scanned >= self._len:
            return False
        nl = self._data.find(b"\n", self._scanned)
        if nl == -1:
            self._scanned = self._len
            return False
        self._line_starts.append(nl + 1)
        self._scanned = nl + 1
        return True

    def _line_bounds(self, line: int) -> tuple[int, int]:
        """Byte range of ``line`` excluding its ``\\n``."""
        starts = self._line_starts
        while len(starts) <= line and self._scan_line():
            pass
        if line < 1 or line > len(starts):
            raise ContractViolation(f"line {line} out of range")
        start = starts[line - 1]
        end = starts[line] - 1 if line < len(starts) else self._len
        return start, end

    # =========================================================================
    # Lookups
    # =========================================================================

    def position(self, offset: int) -> Position:
        """Get the Position of a byte offset.

        Args:
            offset: UTF-8 byte offset, ``0 <= offset <= len_bytes``

        Raises:
            OffsetOutOfRange: If offset lies outside the input.
            ContractViolation: If offset splits a multi-byte character.

        """
        _check_offset(self._data, offset)
        self._scan_to(offset)
        line_idx = bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[line_idx]
        column = len(_decode(self._data[line_start:offset])) + 1
        return Position(offset=offset, line=line_idx + 1, column=column)

    def line_text(self, line: int) -> str:
        """Text of a 1-based line without its line terminator."""
        start, end = self._line_bounds(line)
        text = _decode(self._data[start:end])
        if text.endswith("\r"):
            return text[:-1]
        return text

    def offset_of(self, line: int, column: int) -> int:
        """Byte offset of a 1-based line and column (inverse of position).

        Column ``len(line) + 1`` addresses the end of the line.
        """
        start, end = self._line_bounds(line)
        chars = _decode(self._data[start:end])
        if column < 1 or column > len(chars) + 1:
            raise ContractViolation(f"column {column} out of range for line {line}")
        return start + sum(utf8_width(c) for c in chars[: column - 1])


__all__ = ["LineIndex", "encode_source", "position_at", "utf8_width"]
