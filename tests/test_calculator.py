"""End-to-end test: a small calculator built on the toolkit.

The lexer runs on TextCursor, the Pratt parser on TokenCursor, and both
stages report problems to one DiagnosticCollector.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from grammarsmith import (
    DiagnosticCollector,
    Span,
    TextCursor,
    TokenCursor,
    render_diagnostics,
)


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    text: str
    span: Span


@dataclass(frozen=True, slots=True)
class Node:
    value: int
    span: Span


_BINDING_POWER = {"+": 10, "-": 10, "*": 20, "/": 20}

_APPLY = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": lambda a, b: a // b,
}


def lex(source: str, diagnostics: DiagnosticCollector) -> list[Token]:
    cursor = TextCursor(source)
    tokens: list[Token] = []
    while not cursor.at_end():
        start = cursor.checkpoint()
        char = cursor.advance()
        if char.isspace():
            continue
        if char.isdigit():
            cursor.advance_while(str.isdigit)
            tokens.append(Token("number", cursor.slice_since(start), cursor.span_since(start)))
        elif char in "+-*/()":
            tokens.append(Token(char, char, cursor.span_since(start)))
        else:
            diagnostics.error(f"unexpected character {char!r}", cursor.span_since(start))
    return tokens


def _kind(kind: str):
    return lambda token: token.kind == kind


class Calculator:
    def __init__(self, tokens: list[Token], diagnostics: DiagnosticCollector) -> None:
        self.cursor = TokenCursor(tokens)
        self.diagnostics = diagnostics

    def parse(self) -> Node | None:
        node = self.expression()
        if node is not None and not self.cursor.at_end():
            self.diagnostics.error("unexpected trailing input", self.cursor.skip_until())
            return None
        return node

    def expression(self, min_power: int = 0) -> Node | None:
        left = self.prefix()
        while left is not None:
            op = self.cursor.peek()
            if not op or op.kind not in _BINDING_POWER:
                break
            power = _BINDING_POWER[op.kind]
            if power <= min_power:
                break
            self.cursor.advance()
            right = self.expression(power)
            if right is None:
                return None
            left = Node(_APPLY[op.kind](left.value, right.value), left.span.merge(right.span))
        return left

    def prefix(self) -> Node | None:
        mark = self.cursor.checkpoint()
        if self.cursor.advance_if(_kind("number")):
            token = self.cursor.previous()
            return Node(int(token.text), token.span)
        if self.cursor.advance_if(_kind("(")):
            inner = self.expression()
            if inner is None:
                return None
            if not self.cursor.advance_if(_kind(")")):
                self.diagnostics.error(
                    "expected ')'", self.cursor.peek_span(), hint="close the parenthesis"
                )
                return None
            return Node(inner.value, self.cursor.span_since(mark))
        self.diagnostics.error("expected expression", self.cursor.peek_span())
        return None


def evaluate(source: str) -> tuple[Node | None, DiagnosticCollector]:
    diagnostics = DiagnosticCollector()
    tokens = lex(source, diagnostics)
    return Calculator(tokens, diagnostics).parse(), diagnostics


class TestEvaluation:
    """Operator precedence and associativity."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("123", 123),
            ("123 + 456", 579),
            ("123 + 456 * 789", 359907),
            ("123 + 456 * 789 / 2", 180015),
            ("123 + 456 * 789 / 2 + 3", 180018),
            ("123 + 456 * 789 / 2 + 3 * 4", 180027),
            ("123 + 456 * 789 / 2 + 3 * 4 / 5", 180017),
            ("10 - 3 - 2", 5),
            ("(1 + 2) * 3", 9),
        ],
    )
    def test_value(self, source: str, expected: int) -> None:
        node, diagnostics = evaluate(source)
        assert not diagnostics.has_errors()
        assert node is not None
        assert node.value == expected


class TestSpans:
    """Node spans are merged from their operands."""

    def test_binary_node_covers_operands(self) -> None:
        node, _ = evaluate("  1 + 2  ")
        assert node is not None
        assert (node.span.start.offset, node.span.end.offset) == (2, 7)

    def test_parenthesized_node_includes_parentheses(self) -> None:
        node, _ = evaluate("(1 + 2) * 3")
        assert node is not None
        assert (node.span.start.offset, node.span.end.offset) == (0, 11)

    def test_multi_line_expression(self) -> None:
        node, _ = evaluate("1 +\n  2")
        assert node is not None
        assert str(node.span.end) == "2:4"


class TestDiagnostics:
    """Both stages share one collector."""

    def test_missing_operand(self) -> None:
        node, diagnostics = evaluate("1 + * 2")
        assert node is None
        [diag] = diagnostics.drain()
        assert diag.message == "expected expression"
        assert render_diagnostics([diag], "1 + * 2").splitlines() == [
            "error: expected expression",
            " --> 1:5",
            "  |",
            "1 | 1 + * 2",
            "  |     ^",
        ]

    def test_missing_operand_at_end_points_after_last_token(self) -> None:
        _, diagnostics = evaluate("1 +")
        [diag] = diagnostics.drain()
        assert diag.span.is_empty
        assert str(diag.span.start) == "1:4"

    def test_unexpected_character_does_not_stop_parsing(self) -> None:
        node, diagnostics = evaluate("1 + @2")
        assert node is not None
        assert node.value == 3
        [diag] = diagnostics.drain()
        assert diag.message == "unexpected character '@'"
        assert str(diag.span) == "1:5-1:6"

    def test_unclosed_parenthesis(self) -> None:
        _, diagnostics = evaluate("(1 + 2")
        [diag] = diagnostics.drain()
        assert diag.message == "expected ')'"
        assert diag.hint == "close the parenthesis"

    def test_trailing_input_is_skipped_as_one_region(self) -> None:
        _, diagnostics = evaluate("1 2 3")
        [diag] = diagnostics.drain()
        assert diag.message == "unexpected trailing input"
        assert (diag.span.start.offset, diag.span.end.offset) == (2, 5)

    def test_lexer_and_parser_errors_in_report_order(self) -> None:
        _, diagnostics = evaluate("1 + # *")
        assert [d.message for d in diagnostics.drain()] == [
            "unexpected character '#'",
            "expected expression",
        ]
