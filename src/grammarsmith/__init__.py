"""
Grammarsmith: building blocks for hand-written lexers and parsers

Position/span tracking, a backtrackable cursor that works over characters
and tokens alike, and diagnostic collection with source rendering. No
grammar is built in and there are zero runtime dependencies.

Quick Start:
    >>> from grammarsmith import DiagnosticCollector, TextCursor, render_diagnostics
    >>> cursor = TextCursor("let x = @")
    >>> diagnostics = DiagnosticCollector()
    >>> while not cursor.at_end():
    ...     start = cursor.checkpoint()
    ...     if cursor.advance() == "@":
    ...         diagnostics.error("unexpected character", cursor.span_since(start))
    >>> print(render_diagnostics(diagnostics.drain(), cursor.source))
    error: unexpected character
     --> 1:9
      |
    1 | let x = @
      |         ^

Backtracking:
    >>> mark = cursor.checkpoint()
    >>> ...  # try one alternative
    >>> cursor.restore(mark)  # and rewind in O(1) if it fails
"""

from grammarsmith.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from grammarsmith.cursor import EOF, Checkpoint, Cursor, EndOfInputMarker
from grammarsmith.diagnostics import Diagnostic, DiagnosticCollector, Severity
from grammarsmith.errors import (
    CheckpointMismatch,
    ContractViolation,
    EndOfInput,
    GrammarsmithError,
    InvalidSpan,
    OffsetOutOfRange,
)
from grammarsmith.lineindex import LineIndex, position_at, utf8_width
from grammarsmith.location import (
    HasSpan,
    Position,
    Span,
    Spanned,
    contains,
    merge,
    merge_all,
    span_of,
)
from grammarsmith.render import render_diagnostic, render_diagnostics
from grammarsmith.scanner import TextCursor
from grammarsmith.serialization import from_dict, from_json, to_dict, to_json
from grammarsmith.tokens import TokenCursor

__version__ = "0.1.0"

__all__ = [
    "EOF",
    "Checkpoint",
    "CheckpointMismatch",
    "ContractViolation",
    "Cursor",
    "Diagnostic",
    "DiagnosticCollector",
    "EndOfInput",
    "EndOfInputMarker",
    "GrammarsmithError",
    "HasSpan",
    "InvalidSpan",
    "LineIndex",
    "OffsetOutOfRange",
    "Position",
    "RenderConfig",
    "Severity",
    "Span",
    "Spanned",
    "TextCursor",
    "TokenCursor",
    "__version__",
    "contains",
    "from_dict",
    "from_json",
    "get_render_config",
    "merge",
    "merge_all",
    "position_at",
    "render_config_context",
    "render_diagnostic",
    "render_diagnostics",
    "reset_render_config",
    "set_render_config",
    "span_of",
    "to_dict",
    "to_json",
    "utf8_width",
]
