"""
Lexer for deccalc expressions.

Produces tokens lazily, one per ``next()`` call. The lexer is a single-pass
iterator: once it yields EOF or rejects a character it stops for good.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from decimal import Decimal, InvalidOperation
from typing import NoReturn

from deccalc.tokens import SINGLE_CHAR_TOKENS, Token, TokenKind

logger = logging.getLogger(__name__)


class Lexer:
    """Iterator over the tokens of an expression string.

    After output stops because of a rejected character, ``unexpected_char``
    and ``unexpected_pos`` describe it; both stay ``None`` when input ended
    normally with EOF.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.reached_end = False
        self.unexpected_char: str | None = None
        self.unexpected_pos: int | None = None

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        if self.reached_end:
            raise StopIteration

        source = self.source
        n = len(source)

        # Skip whitespace
        while self.pos < n and source[self.pos].isspace():
            self.pos += 1

        if self.pos >= n:
            self.reached_end = True
            return Token(TokenKind.EOF)

        c = source[self.pos]

        if _is_digit(c):
            return self._read_number()

        kind = SINGLE_CHAR_TOKENS.get(c)
        if kind is not None:
            self.pos += 1
            return Token(kind)

        self._reject(c, self.pos)

    def _read_number(self) -> Token:
        """Read digits and dots greedily, then parse the lexeme as a Decimal."""
        source = self.source
        start = self.pos
        end = start
        while end < len(source) and (_is_digit(source[end]) or source[end] == "."):
            end += 1
        lexeme = source[start:end]
        self.pos = end

        try:
            value = Decimal(lexeme)
        except InvalidOperation:
            value = None
        # Untrapped InvalidOperation yields NaN instead of raising
        if value is None or value.is_nan():
            offset = _offending_index(lexeme)
            self._reject(lexeme[offset], start + offset)

        return Token.number(value)

    def _reject(self, char: str, pos: int) -> NoReturn:
        """Record a rejected character and stop producing tokens."""
        logger.debug("Rejected %r at offset %d", char, pos)
        self.unexpected_char = char
        self.unexpected_pos = pos
        self.reached_end = True
        raise StopIteration


def _is_digit(c: str) -> bool:
    """ASCII 0-9 only; other Unicode digits are rejected like any symbol."""
    return c.isascii() and c.isdigit()


def _offending_index(lexeme: str) -> int:
    """Index of the dot that makes a numeral invalid.

    The lexeme holds only ASCII digits and dots, so the only way it can
    fail to parse is a second dot.
    """
    first = lexeme.index(".")
    return lexeme.index(".", first + 1)


def tokenize(source: str) -> list[Token]:
    """Collect every token the lexer produces before output stops.

    Unlike the parser this never raises: a rejected character simply ends
    the list early, without an EOF token.
    """
    return list(Lexer(source))
