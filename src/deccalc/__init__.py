"""
deccalc - exact decimal arithmetic expression calculator.

Lexer, precedence-climbing parser, and evaluator for expressions built
from +, -, *, /, ^, unary minus, and parentheses.

Usage:
    from deccalc import calculate

    result = calculate("0.1 + 0.2")
    # result == Decimal("0.3")
"""

from __future__ import annotations

from deccalc._version import get_version
from deccalc.calculator import calculate
from deccalc.errors import (
    CalcError,
    DivisionByZeroError,
    EvaluationError,
    IncompleteExpressionError,
    InvalidSyntaxError,
    UnexpectedCharError,
)
from deccalc.evaluator import evaluate
from deccalc.parser import parse_expr
from deccalc.settings import CalcSettings, get_settings

__version__ = get_version()

__all__ = [
    "__version__",
    "CalcError",
    "CalcSettings",
    "DivisionByZeroError",
    "EvaluationError",
    "IncompleteExpressionError",
    "InvalidSyntaxError",
    "UnexpectedCharError",
    "calculate",
    "evaluate",
    "get_settings",
    "parse_expr",
]
