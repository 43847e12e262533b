"""Tests for the character-level TextCursor."""

import pytest

from grammarsmith.cursor import EOF
from grammarsmith.errors import ContractViolation
from grammarsmith.lineindex import LineIndex
from grammarsmith.location import Position, Spanned
from grammarsmith.scanner import TextCursor


class TestScanning:
    """Character traversal over multi-byte text."""

    def test_next_and_slice(self) -> None:
        cursor = TextCursor("123🦀€é")
        start = cursor.checkpoint()
        assert cursor.slice_since(start) == ""
        expected = ["1", "12", "123", "123🦀", "123🦀€", "123🦀€é"]
        for text in expected:
            cursor.advance()
            assert cursor.slice_since(start) == text

    def test_peek(self) -> None:
        cursor = TextCursor("123🦀€é")
        for char in "123🦀€é":
            assert cursor.peek() == char
            cursor.advance()
        assert cursor.peek() is EOF

    def test_offset_tracks_bytes(self) -> None:
        cursor = TextCursor("123🦀€é")
        for _ in range(4):
            cursor.advance()
        assert cursor.offset == 7
        assert cursor.position() == Position(offset=7, line=1, column=5)

    def test_accepts_sequence_of_characters(self) -> None:
        cursor = TextCursor(["a", "b", "c"])
        mark = cursor.checkpoint()
        cursor.advance()
        cursor.advance()
        span = cursor.span_since(mark)
        assert span.start == Position(offset=0, line=1, column=1)
        assert span.end == Position(offset=2, line=1, column=3)
        cursor.restore(mark)
        assert cursor.peek() == "a"


class TestSpans:
    """Spans use byte offsets and code-point columns."""

    def test_span_across_lines(self) -> None:
        cursor = TextCursor("ab\ncd")
        mark = cursor.checkpoint()
        for _ in range(4):
            cursor.advance()
        span = cursor.span_since(mark)
        assert span.start == Position(offset=0, line=1, column=1)
        assert span.end == Position(offset=4, line=2, column=2)

    def test_span_width_is_byte_width(self) -> None:
        cursor = TextCursor("x€🦀y")
        cursor.advance()
        mark = cursor.checkpoint()
        cursor.advance()
        cursor.advance()
        span = cursor.span_since(mark)
        assert span.length == 7
        assert (span.start.column, span.end.column) == (2, 4)

    def test_restore_resets_offset(self) -> None:
        cursor = TextCursor("€€€")
        mark = cursor.checkpoint()
        cursor.advance()
        cursor.advance()
        assert cursor.offset == 6
        cursor.restore(mark)
        assert cursor.offset == 0
        assert cursor.position().column == 1

    def test_spanned(self) -> None:
        cursor = TextCursor("42 + x")
        mark = cursor.checkpoint()
        cursor.advance_while(str.isdigit)
        token = cursor.spanned(int(cursor.slice_since(mark)), mark)
        assert isinstance(token, Spanned)
        assert token.value == 42
        assert (token.span.start.offset, token.span.end.offset) == (0, 2)


class TestScannerHelpers:
    """Original scanner conveniences expressed through the cursor API."""

    def test_consume_if(self) -> None:
        cursor = TextCursor("123abc")
        mark = cursor.checkpoint()
        assert cursor.advance_if(str.isnumeric)
        assert cursor.advance_if(str.isnumeric)
        assert cursor.advance_if(str.isnumeric)
        assert not cursor.advance_if(str.isnumeric)
        assert cursor.slice_since(mark) == "123"

    def test_consume_if_next(self) -> None:
        cursor = TextCursor("123abc")
        mark = cursor.checkpoint()
        assert cursor.advance_if_next(str.isnumeric)
        assert cursor.advance_if_next(str.isnumeric)
        assert not cursor.advance_if_next(str.isnumeric)
        assert cursor.slice_since(mark) == "12"

    def test_next_match(self) -> None:
        cursor = TextCursor("==")
        assert cursor.advance_if("=")
        assert cursor.advance_if("=")
        assert not cursor.advance_if("=")

    def test_check_does_not_consume(self) -> None:
        cursor = TextCursor("123abc")
        assert cursor.check(str.isnumeric)
        assert cursor.offset == 0


class TestLineIndexSharing:
    """Several cursors can share one LineIndex."""

    def test_shared_index(self) -> None:
        index = LineIndex("ab\ncd")
        first = TextCursor("ab\ncd", line_index=index)
        second = TextCursor("ab\ncd", line_index=index)
        assert first.line_index is second.line_index

    def test_mismatched_index_rejected(self) -> None:
        with pytest.raises(ContractViolation):
            TextCursor("abc", line_index=LineIndex("xyz"))
