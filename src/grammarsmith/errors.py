"""Exception classes for Grammarsmith.

Two families live here and must not be confused:

- ContractViolation and its subclasses signal misuse of the API by the
  caller (an offset past the input, a checkpoint handed to the wrong
  cursor, a span whose start lies after its end). They fail loudly.
- EndOfInput signals the ordinary "no more input" outcome of
  Cursor.advance(). Lexers and parsers catch it as normal control flow.

Problems found in user-supplied input are never raised; they are reported
as Diagnostic values (see grammarsmith.diagnostics).
"""

from __future__ import annotations

from typing import Any


class GrammarsmithError(Exception):
    """Base exception for all Grammarsmith errors.

    Subclass this for specific error categories.
    """

    pass


class ContractViolation(GrammarsmithError):
    """The caller broke an API contract.

    Never raised because of the content being lexed or parsed.
    """

    pass


class OffsetOutOfRange(ContractViolation, IndexError):
    """Byte offset outside ``[0, length]`` of the input."""

    def __init__(self, offset: int, length: int) -> None:
        """Initialize with the offending offset.

        Args:
            offset: Offset that was requested
            length: Length of the input in bytes
        """
        self.offset = offset
        self.length = length
        super().__init__(f"offset {offset} out of range for input of {length} bytes")


class InvalidSpan(ContractViolation, ValueError):
    """Span whose start lies after its end."""

    def __init__(self, start: Any, end: Any) -> None:
        self.start = start
        self.end = end
        super().__init__(f"span start {start} is after span end {end}")


class CheckpointMismatch(ContractViolation):
    """Checkpoint used with a cursor other than the one that created it."""

    def __init__(self, checkpoint: Any) -> None:
        self.checkpoint = checkpoint
        super().__init__(f"{checkpoint!r} was not taken on this cursor")


class EndOfInput(GrammarsmithError):
    """No more input to consume.

    Raised by Cursor.advance() at the end of the sequence. This is ordinary
    control flow for a lexer or parser, not a contract violation.
    """

    def __init__(self, index: int) -> None:
        """Initialize with the cursor index at which input ran out.

        Args:
            index: Cursor index (equal to the sequence length)
        """
        self.index = index
        super().__init__(f"end of input at index {index}")
