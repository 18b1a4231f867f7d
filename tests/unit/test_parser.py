"""Tests for the deccalc precedence-climbing parser."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from deccalc.errors import (
    IncompleteExpressionError,
    InvalidSyntaxError,
    UnexpectedCharError,
)
from deccalc.expressions import BinaryExpr, BinaryOp, Literal, NegateExpr
from deccalc.parser import Parser, parse_expr
from deccalc.tokens import TokenKind


def lit(value: str) -> Literal:
    return Literal(value=Decimal(value))


class TestParserLiterals:
    """Parser handles numbers and grouping."""

    def test_integer(self) -> None:
        expr = parse_expr("42")
        assert isinstance(expr, Literal)
        assert expr.value == Decimal("42")

    def test_fraction(self) -> None:
        assert parse_expr("3.14") == lit("3.14")

    def test_parentheses_unwrap(self) -> None:
        assert parse_expr("(((7)))") == lit("7")


class TestParserArithmetic:
    """Parser builds trees with correct precedence and grouping."""

    def test_precedence_tree(self) -> None:
        # 1 + 2 * 3 - 4 is (1 + (2 * 3)) - 4
        assert parse_expr("1 + 2 * 3 -4") == BinaryExpr(
            op=BinaryOp.SUB,
            left=BinaryExpr(
                op=BinaryOp.ADD,
                left=lit("1"),
                right=BinaryExpr(op=BinaryOp.MUL, left=lit("2"), right=lit("3")),
            ),
            right=lit("4"),
        )

    def test_chained_subtraction_left_associative(self) -> None:
        expr = parse_expr("1 - 2 - 3")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.SUB
        assert isinstance(expr.left, BinaryExpr)
        assert expr.left.op == BinaryOp.SUB
        assert expr.right == lit("3")

    def test_chained_division_left_associative(self) -> None:
        assert str(parse_expr("8 / 4 / 2")) == "((8 / 4) / 2)"

    def test_power_left_associative(self) -> None:
        # Repeated ^ folds to the left: (2 ^ 3) ^ 2
        expr = parse_expr("2 ^ 3 ^ 2")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.POW
        assert expr.left == BinaryExpr(op=BinaryOp.POW, left=lit("2"), right=lit("3"))
        assert expr.right == lit("2")

    def test_power_before_multiply(self) -> None:
        assert str(parse_expr("2 * 3 ^ 2")) == "(2 * (3 ^ 2))"

    def test_parentheses_override_precedence(self) -> None:
        expr = parse_expr("(1 + 2) * 3")
        assert isinstance(expr, BinaryExpr)
        assert expr.op == BinaryOp.MUL
        assert isinstance(expr.left, BinaryExpr)
        assert expr.left.op == BinaryOp.ADD


class TestParserUnary:
    """Unary minus binds tighter than every binary operator."""

    def test_negate_literal(self) -> None:
        assert parse_expr("-5") == NegateExpr(operand=lit("5"))

    def test_negate_before_multiply(self) -> None:
        assert parse_expr("-2 * 3") == BinaryExpr(
            op=BinaryOp.MUL, left=NegateExpr(operand=lit("2")), right=lit("3")
        )

    def test_negate_before_power(self) -> None:
        assert parse_expr("-2 ^ 2") == BinaryExpr(
            op=BinaryOp.POW, left=NegateExpr(operand=lit("2")), right=lit("2")
        )

    def test_double_negation(self) -> None:
        assert parse_expr("--2") == NegateExpr(operand=NegateExpr(operand=lit("2")))

    def test_negate_right_operand(self) -> None:
        assert str(parse_expr("2 * -3")) == "(2 * -3)"

    def test_negate_group(self) -> None:
        assert str(parse_expr("-(1 + 2)")) == "-(1 + 2)"

    def test_negate_literal_str(self) -> None:
        assert str(parse_expr("-2")) == "-2"

    def test_small_literal_str(self) -> None:
        assert str(parse_expr("0.00000000 - 0.0000001")) == "(0.00000000 - 0.0000001)"


class TestParserConstruction:
    """The first token is read when the parser is built."""

    def test_first_token_read_eagerly(self) -> None:
        parser = Parser("7 + 1")
        assert parser.current.kind == TokenKind.NUMBER
        assert parser.current.value == Decimal("7")

    def test_rejected_first_character_fails_construction(self) -> None:
        with pytest.raises(UnexpectedCharError) as exc_info:
            Parser("# 1")
        assert exc_info.value.char == "#"
        assert exc_info.value.pos == 0

    def test_empty_input_fails_on_parse(self) -> None:
        parser = Parser("")
        with pytest.raises(IncompleteExpressionError):
            parser.parse()


class TestParserErrors:
    """Parser reports lexical and syntax errors fail-fast."""

    def test_malformed_number(self) -> None:
        with pytest.raises(UnexpectedCharError) as exc_info:
            parse_expr("1 + 2.3.4")
        assert exc_info.value.char == "."

    def test_unclosed_paren(self) -> None:
        with pytest.raises(IncompleteExpressionError, match="Incomplete expression"):
            parse_expr("(1 + 2")

    def test_wrong_closing_token(self) -> None:
        with pytest.raises(InvalidSyntaxError, match="Expected right parenthesis, found 3"):
            parse_expr("(1 + 2 3")

    def test_error_names_number_as_typed(self) -> None:
        with pytest.raises(InvalidSyntaxError, match=r"found 0\.0000001$"):
            parse_expr("(1 0.0000001")

    def test_wrong_closing_character(self) -> None:
        # ']' is rejected by the lexer before the parser can look for ')'
        with pytest.raises(UnexpectedCharError) as exc_info:
            parse_expr("(1 + 2]")
        assert exc_info.value.char == "]"

    def test_trailing_operator(self) -> None:
        with pytest.raises(IncompleteExpressionError):
            parse_expr("1 +")

    def test_operator_instead_of_operand(self) -> None:
        with pytest.raises(InvalidSyntaxError, match=r"Expected a number or expression, found \*"):
            parse_expr("2 + * 3")

    def test_stray_close_paren(self) -> None:
        with pytest.raises(InvalidSyntaxError, match=r"found \)"):
            parse_expr(")")

    def test_trailing_tokens(self) -> None:
        with pytest.raises(InvalidSyntaxError, match="after expression"):
            parse_expr("1 2")
        with pytest.raises(InvalidSyntaxError, match="after expression"):
            parse_expr("(1 + 2))")

    def test_implicit_multiplication_rejected(self) -> None:
        with pytest.raises(InvalidSyntaxError):
            parse_expr("2(3)")

    def test_incomplete_is_syntax_error(self) -> None:
        assert issubclass(IncompleteExpressionError, InvalidSyntaxError)


class TestExpressionNodes:
    """Tree nodes are frozen values."""

    def test_frozen(self) -> None:
        expr = parse_expr("1 + 2")
        with pytest.raises(ValidationError):
            expr.op = BinaryOp.SUB  # type: ignore[misc]

    def test_str(self) -> None:
        assert str(parse_expr("1 + 2 * 3")) == "(1 + (2 * 3))"
