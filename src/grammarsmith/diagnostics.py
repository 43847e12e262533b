"""Structured diagnostics and their collector.

Problems found in the input being lexed or parsed are reported here instead
of being raised, so a single pass can surface every problem. The collector
keeps diagnostics in report order; it neither sorts nor deduplicates them,
and it never decides whether processing should stop. Callers check
has_errors() between stages (skip parsing if lexing failed, and so on).

Usage:
    >>> collector = DiagnosticCollector()
    >>> collector.error("unterminated string", span, hint="add a closing quote")
    >>> if collector.has_errors():
    ...     print(render_diagnostics(collector.drain(), source))

Thread Safety:
Diagnostic is frozen and safe to share. DiagnosticCollector is not
synchronized; use one per thread or lock externally.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from grammarsmith.location import Span
from grammarsmith.utils.logger import get_logger

logger = get_logger(__name__)


class Severity(Enum):
    """How serious a diagnostic is."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A span-tagged problem report.

    Attributes:
        severity: Error, warning or info
        message: Human-readable description
        span: Source range the problem refers to (zero-width for
            insertion points such as a missing token)
        hint: Optional suggested fix

    """

    severity: Severity
    message: str
    span: Span
    hint: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        """Format as ``line:column: severity: message``."""
        return f"{self.span.start}: {self.severity}: {self.message}"


class DiagnosticCollector:
    """Append-only accumulator of diagnostics, in report order."""

    __slots__ = ("_diagnostics", "_error_count")

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []
        self._error_count = 0

    def __repr__(self) -> str:
        return f"DiagnosticCollector({len(self._diagnostics)} diagnostics, {self._error_count} errors)"

    def __len__(self) -> int:
        return len(self._diagnostics)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(tuple(self._diagnostics))

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Snapshot of everything reported so far."""
        return tuple(self._diagnostics)

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self._diagnostics if d.severity is Severity.WARNING)

    def report(
        self,
        severity: Severity,
        message: str,
        span: Span,
        hint: str | None = None,
    ) -> Diagnostic:
        """Append a diagnostic.

        Args:
            severity: Error, warning or info
            message: Human-readable description
            span: Source range of the problem
            hint: Optional suggested fix

        Returns:
            The recorded Diagnostic.
        """
        diagnostic = Diagnostic(severity, message, span, hint)
        self._diagnostics.append(diagnostic)
        if severity is Severity.ERROR:
            self._error_count += 1
        logger.debug("reported %s at %s: %s", severity.value, span, message)
        return diagnostic

    def error(self, message: str, span: Span, hint: str | None = None) -> Diagnostic:
        return self.report(Severity.ERROR, message, span, hint)

    def warning(self, message: str, span: Span, hint: str | None = None) -> Diagnostic:
        return self.report(Severity.WARNING, message, span, hint)

    def info(self, message: str, span: Span, hint: str | None = None) -> Diagnostic:
        return self.report(Severity.INFO, message, span, hint)

    def has_errors(self) -> bool:
        """True iff any diagnostic reported since the last drain is an error."""
        return self._error_count > 0

    def drain(self) -> list[Diagnostic]:
        """Return all diagnostics in report order and empty the collector."""
        drained = self._diagnostics
        self._diagnostics = []
        self._error_count = 0
        return drained


__all__ = ["Diagnostic", "DiagnosticCollector", "Severity"]
