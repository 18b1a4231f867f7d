"""
Precedence-climbing parser for deccalc expressions.

Grammar (precedence low to high):
    expr     → term (("+" | "-") term)*
    term     → power (("*" | "/") power)*
    power    → unary ("^" unary)*
    unary    → "-" unary | primary
    primary  → NUMBER | "(" expr ")"

The grammar is not walked rule by rule. ``parse_expression`` takes a
precedence floor and keeps folding operators into the left operand while
they bind tighter than the floor. The right operand of an operator is
parsed with that operator's own level as the floor, so a following
operator of the same level is folded by the outer loop instead: every
binary operator, ``^`` included, groups to the left (``2 ^ 3 ^ 2`` is
``(2 ^ 3) ^ 2``). Unary minus parses its operand at UNARY, above every
binary operator, so ``-2 ^ 2`` is ``(-2) ^ 2``.
"""

from __future__ import annotations

import logging

from deccalc.errors import (
    IncompleteExpressionError,
    InvalidSyntaxError,
    UnexpectedCharError,
)
from deccalc.expressions import BinaryExpr, BinaryOp, Expr, Literal, NegateExpr
from deccalc.lexer import Lexer
from deccalc.tokens import Precedence, Token, TokenKind

logger = logging.getLogger(__name__)

_BINARY_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.CARET: BinaryOp.POW,
}


class Parser:
    """Builds an expression tree from source text.

    The parser owns a fresh lexer and a single current-token slot. The
    first token is read on construction, so rejected leading input fails
    here rather than in ``parse()``.

    Raises:
        UnexpectedCharError: If the lexer rejects the first character.
    """

    def __init__(self, source: str) -> None:
        self.lexer = Lexer(source)
        self.current: Token = self._pull()

    def parse(self) -> Expr:
        """Parse the whole input as one expression.

        Raises:
            UnexpectedCharError: If the lexer rejects a character.
            IncompleteExpressionError: If input ends too early.
            InvalidSyntaxError: If a token appears where it can't.
        """
        expr = self.parse_expression(Precedence.LOWEST)

        if self.current.kind != TokenKind.EOF:
            raise InvalidSyntaxError(f"Unexpected token after expression: {self.current}")

        logger.debug("Parsed %r as %s", self.lexer.source, expr)
        return expr

    # -- Token handling --

    def _pull(self) -> Token:
        tok = next(self.lexer, None)
        if tok is None:
            if self.lexer.unexpected_char is None:
                # Only reachable by advancing past EOF
                raise IncompleteExpressionError()
            raise UnexpectedCharError(self.lexer.unexpected_char, self.lexer.unexpected_pos)
        return tok

    def advance(self) -> None:
        """Replace the current token with the next one from the lexer."""
        self.current = self._pull()

    # -- Precedence climbing --

    def parse_expression(self, floor: Precedence) -> Expr:
        """Parse a primary, then fold operators binding tighter than ``floor``."""
        expr = self.parse_primary()
        while self.current.precedence > floor:
            expr = self.parse_binary(expr)
        return expr

    def parse_binary(self, left: Expr) -> BinaryExpr:
        """Fold the current operator and its right operand onto ``left``."""
        tok = self.current
        op = _BINARY_OPS.get(tok.kind)
        if op is None:
            raise InvalidSyntaxError(f"Expected an operator, found {tok}")
        self.advance()
        right = self.parse_expression(tok.precedence)
        return BinaryExpr(op=op, left=left, right=right)

    def parse_primary(self) -> Expr:
        """NUMBER | '-' unary | '(' expr ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return Literal(value=tok.value)

        if tok.kind == TokenKind.MINUS:
            self.advance()
            operand = self.parse_expression(Precedence.UNARY)
            return NegateExpr(operand=operand)

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            expr = self.parse_expression(Precedence.LOWEST)
            if self.current.kind == TokenKind.EOF:
                raise IncompleteExpressionError()
            if self.current.kind != TokenKind.RPAREN:
                raise InvalidSyntaxError(f"Expected right parenthesis, found {self.current}")
            self.advance()
            return expr

        if tok.kind == TokenKind.EOF:
            raise IncompleteExpressionError()
        raise InvalidSyntaxError(f"Expected a number or expression, found {tok}")


def parse_expr(source: str) -> Expr:
    """Parse an expression string into a tree.

    Args:
        source: Expression string (e.g., "1 + 2 * 3")

    Returns:
        Parsed expression tree.

    Raises:
        UnexpectedCharError: If lexing fails.
        InvalidSyntaxError: If the tokens don't form an expression.
    """
    return Parser(source).parse()
