"""
Error types for deccalc lexing, parsing, and evaluation.
"""


class CalcError(Exception):
    """Base exception for all deccalc errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnexpectedCharError(CalcError):
    """
    Raised when the lexer rejects a character.

    Examples:
    - A character outside the token alphabet (``1 $ 2``)
    - A numeral that is not a valid decimal (``2.3.4``)
    """

    def __init__(self, char: str, pos: int | None = None):
        self.char = char
        self.pos = pos
        super().__init__(f"Unexpected character: {char!r}")


class InvalidSyntaxError(CalcError):
    """
    Raised when the token sequence does not form an expression.

    Examples:
    - Operator where an operand is required (``2 + * 3``)
    - Missing closing parenthesis before another token (``(1 + 2 3``)
    - Tokens left over after a complete expression (``1 2``)
    """

    pass


class IncompleteExpressionError(InvalidSyntaxError):
    """Raised when input ends where an operand or ``)`` was required."""

    def __init__(self, message: str = "Incomplete expression"):
        super().__init__(message)


class EvaluationError(CalcError):
    """
    Raised when decimal arithmetic fails while evaluating a tree.

    Examples:
    - Negative base with a fractional exponent (``(-8) ^ 0.5``)
    - Result exponent out of range
    """

    pass


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    """Raised for ``x / 0``, including ``0 / 0``."""

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)
