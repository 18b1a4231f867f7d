"""
Expression evaluator for deccalc.

Folds an expression tree into a single Decimal. Pure evaluation with no
I/O and no use of Python's eval(). Arithmetic runs in a local decimal
context built from CalcSettings, so the caller's context is untouched.
"""

from __future__ import annotations

import decimal
import logging
from decimal import Decimal

from deccalc.errors import DivisionByZeroError, EvaluationError
from deccalc.expressions import BinaryExpr, BinaryOp, Expr, Literal, NegateExpr
from deccalc.settings import CalcSettings

logger = logging.getLogger(__name__)


def evaluate(expr: Expr, settings: CalcSettings | None = None) -> Decimal:
    """Evaluate an expression tree.

    Args:
        expr: Parsed expression tree.
        settings: Precision and rounding. Defaults to ``CalcSettings()``.

    Returns:
        The computed value.

    Raises:
        DivisionByZeroError: If a divisor is zero, or zero is raised to a
            negative power.
        EvaluationError: If decimal arithmetic signals any other error.
    """
    settings = settings or CalcSettings()
    with decimal.localcontext(settings.make_context()):
        result = _interpret(expr)
    logger.debug("Evaluated %s = %s", expr, result)
    return result


def _interpret(expr: Expr) -> Decimal:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, NegateExpr):
        return -_interpret(expr.operand)

    if isinstance(expr, BinaryExpr):
        return _apply_binary(expr.op, _interpret(expr.left), _interpret(expr.right))

    raise EvaluationError(f"Unknown expression type: {type(expr).__name__}")


def _apply_binary(op: BinaryOp, left: Decimal, right: Decimal) -> Decimal:
    """Apply one binary operator, translating decimal signals to CalcErrors."""
    try:
        if op == BinaryOp.ADD:
            return left + right
        if op == BinaryOp.SUB:
            return left - right
        if op == BinaryOp.MUL:
            return left * right
        if op == BinaryOp.DIV:
            return left / right
        if op == BinaryOp.POW:
            return _power(left, right)
    except ZeroDivisionError as e:
        # decimal.DivisionByZero and DivisionUndefined (0 / 0)
        raise DivisionByZeroError(f"Division by zero: {left} {op.value} {right}") from e
    except decimal.DecimalException as e:
        raise EvaluationError(f"Cannot compute {left} {op.value} {right}: {type(e).__name__}") from e

    raise EvaluationError(f"Unknown binary op: {op}")


def _power(base: Decimal, exponent: Decimal) -> Decimal:
    """General power, fractional exponents included."""
    if exponent.is_zero():
        return Decimal(1)
    # decimal returns Infinity here without signalling
    if base.is_zero() and exponent < 0:
        raise DivisionByZeroError(f"Division by zero: {base} ^ {exponent}")
    return base**exponent
