"""Human-readable rendering of diagnostics against their source.

Each diagnostic renders as a block showing the offending line with the span
underlined:

    error: expected expression
     --> calc.txt:2:5
      |
    2 | 1 + * 2
      |     ^
      = hint: insert an operand

Spans that run past their first line show only that line, underlined to its
end, followed by the continuation marker and the line where the span ends.

Diagnostics render in report order unless RenderConfig.sort_by_position
asks otherwise.

Thread Safety:
All functions are pure apart from reading the context-local RenderConfig.

"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from grammarsmith.config import RenderConfig, get_render_config
from grammarsmith.diagnostics import Diagnostic, Severity
from grammarsmith.errors import OffsetOutOfRange
from grammarsmith.lineindex import LineIndex
from grammarsmith.utils.logger import get_logger

logger = get_logger(__name__)


def _cells(char: str) -> int:
    """Terminal cells taken by one character."""
    return 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1


def _padding(prefix: str) -> str:
    """Whitespace that lines up with ``prefix``, keeping its tabs."""
    return "".join("\t" if c == "\t" else " " * _cells(c) for c in prefix)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def _render_one(
    diagnostic: Diagnostic,
    index: LineIndex,
    source_file: str | None,
    config: RenderConfig,
) -> str:
    span = diagnostic.span
    if span.end.offset > index.len_bytes:
        raise OffsetOutOfRange(span.end.offset, index.len_bytes)
    start, end = span.start, span.end

    text = index.line_text(start.line)
    gutter = " " * len(str(start.line))
    location = f"{start.line}:{start.column}"
    if source_file:
        location = f"{source_file}:{location}"

    col = start.column - 1
    # A span ending at column 1 of the next line only covers the line break
    continues = end.line > start.line + 1 or (end.line > start.line and end.column > 1)
    if end.line > start.line:
        marked = text[col:]
    else:
        marked = text[col : end.column - 1]
    width = max(1, sum(_cells(c) for c in marked))
    underline = _padding(text[:col]) + config.underline * width
    if continues:
        underline += f" {config.continuation} (continues to line {end.line})"

    lines = [
        f"{diagnostic.severity}: {diagnostic.message}",
        f"{gutter}--> {location}",
        f"{gutter} |",
        f"{start.line} | {text}" if text else f"{start.line} |",
        f"{gutter} | {underline}",
    ]
    if diagnostic.hint and config.show_hints:
        lines.append(f"{gutter} = hint: {diagnostic.hint}")
    return "\n".join(lines)


def render_diagnostic(
    diagnostic: Diagnostic,
    source: str,
    *,
    source_file: str | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render a single diagnostic against ``source``.

    Args:
        diagnostic: Diagnostic to render
        source: The source text the diagnostic's span refers to
        source_file: Optional file name shown in the ``-->`` line
        config: Rendering options (defaults to the context config)

    Returns:
        Multi-line text without a trailing newline.

    Raises:
        OffsetOutOfRange: If the span lies outside ``source``.

    """
    config = config if config is not None else get_render_config()
    return _render_one(diagnostic, LineIndex(source), source_file, config)


def render_diagnostics(
    diagnostics: Iterable[Diagnostic],
    source: str,
    *,
    source_file: str | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Render diagnostics against ``source``, separated by blank lines.

    Args:
        diagnostics: Diagnostics in the order they should appear
        source: The source text every span refers to
        source_file: Optional file name shown in each ``-->`` line
        config: Rendering options (defaults to the context config)

    Returns:
        Rendered text, empty for no diagnostics.

    """
    config = config if config is not None else get_render_config()
    items = list(diagnostics)
    if config.sort_by_position:
        items.sort(key=lambda d: d.span)
    logger.debug("rendering %d diagnostics", len(items))

    index = LineIndex(source)
    blocks = [_render_one(d, index, source_file, config) for d in items]

    if config.show_summary and items:
        errors = sum(1 for d in items if d.severity is Severity.ERROR)
        warnings = sum(1 for d in items if d.severity is Severity.WARNING)
        parts = []
        if errors:
            parts.append(_plural(errors, "error"))
        if warnings:
            parts.append(_plural(warnings, "warning"))
        if parts:
            blocks.append(f"{', '.join(parts)} emitted")

    return "\n\n".join(blocks)


__all__ = ["render_diagnostic", "render_diagnostics"]
