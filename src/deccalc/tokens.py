"""
Token and precedence model for deccalc.

A token is one operator symbol, parenthesis, numeral, or the end-of-input
marker. Every token maps to exactly one precedence level; the parser folds
an operator into the expression on its left only while that level is above
the current floor.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import IntEnum, StrEnum, auto


class TokenKind(StrEnum):
    """Token types for the calculator grammar."""

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    CARET = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()

    # Literals
    NUMBER = auto()

    # End of input
    EOF = auto()


class Precedence(IntEnum):
    """Operator binding strength, lowest to highest.

    LOWEST sits below every real operator and is the floor for a whole
    expression or a parenthesized group.
    """

    LOWEST = 0
    ADDITIVE = 1
    MULTIPLICATIVE = 2
    POWER = 3
    UNARY = 4


_SYMBOLS: dict[TokenKind, str] = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.CARET: "^",
    TokenKind.LPAREN: "(",
    TokenKind.RPAREN: ")",
    TokenKind.EOF: "EOF",
}

# Reverse of _SYMBOLS for single-character tokens, used by the lexer
SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    symbol: kind for kind, symbol in _SYMBOLS.items() if kind != TokenKind.EOF
}

_PRECEDENCE: dict[TokenKind, Precedence] = {
    TokenKind.PLUS: Precedence.ADDITIVE,
    TokenKind.MINUS: Precedence.ADDITIVE,
    TokenKind.STAR: Precedence.MULTIPLICATIVE,
    TokenKind.SLASH: Precedence.MULTIPLICATIVE,
    TokenKind.CARET: Precedence.POWER,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A single token from the lexer.

    Only NUMBER tokens carry a value. Tokens compare equal by kind and
    value and carry no source position.
    """

    kind: TokenKind
    value: Decimal | None = None

    def __post_init__(self) -> None:
        if self.kind == TokenKind.NUMBER and self.value is None:
            raise ValueError("NUMBER token requires a value")
        if self.kind != TokenKind.NUMBER and self.value is not None:
            raise ValueError(f"{self.kind} token takes no value")

    @classmethod
    def number(cls, value: Decimal) -> Token:
        return cls(TokenKind.NUMBER, value)

    @property
    def precedence(self) -> Precedence:
        return _PRECEDENCE.get(self.kind, Precedence.LOWEST)

    def __str__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return format(self.value, "f")
        return _SYMBOLS[self.kind]
