"""
Entry point for evaluating expression strings.

Usage:
    from deccalc import calculate

    calculate("0.1 + 0.2")  # Decimal('0.3')
"""

from __future__ import annotations

from decimal import Decimal

from deccalc.evaluator import evaluate
from deccalc.parser import Parser
from deccalc.settings import CalcSettings


def calculate(expression: str, settings: CalcSettings | None = None) -> Decimal:
    """Lex, parse, and evaluate an arithmetic expression.

    Each call builds its own lexer and parser, so concurrent calls on
    different inputs share no state.

    Args:
        expression: Text such as ``"(1 + 2) * 3 ^ 0.5"``.
        settings: Decimal precision and rounding. Defaults to
            ``CalcSettings()``; use ``get_settings()`` to honour the
            DECCALC_* environment variables.

    Returns:
        The exact (to the configured precision) decimal result.

    Raises:
        UnexpectedCharError: Lexical error.
        InvalidSyntaxError: Syntax error, including incomplete input.
        EvaluationError: Arithmetic error, including division by zero.
    """
    tree = Parser(expression).parse()
    return evaluate(tree, settings)
