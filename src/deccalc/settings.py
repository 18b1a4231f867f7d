"""
Decimal arithmetic settings for deccalc.

Precision and rounding come from environment variables, following the
same pattern as other ``*_ENV``-style runtime switches:

    DECCALC_PRECISION   significant digits (default 28)
    DECCALC_ROUNDING    one of the ``decimal`` module rounding names
                        (default ROUND_HALF_EVEN)

Usage:
    from deccalc.settings import get_settings

    settings = get_settings()
    with decimal.localcontext(settings.make_context()):
        ...
"""

from __future__ import annotations

import decimal
import logging
import os
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

PRECISION_ENV_VAR = "DECCALC_PRECISION"
ROUNDING_ENV_VAR = "DECCALC_ROUNDING"

# Same number of significant digits as a 96-bit decimal mantissa
DEFAULT_PRECISION = 28


class Rounding(StrEnum):
    """Rounding modes understood by :mod:`decimal`."""

    HALF_EVEN = decimal.ROUND_HALF_EVEN
    HALF_UP = decimal.ROUND_HALF_UP
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR
    ZERO_FIVE_UP = decimal.ROUND_05UP


class CalcSettings(BaseModel):
    """Arithmetic context used while evaluating an expression."""

    precision: int = Field(
        default=DEFAULT_PRECISION,
        ge=1,
        le=decimal.MAX_PREC,
        description="Significant digits kept by every operation",
    )
    rounding: Rounding = Field(
        default=Rounding.HALF_EVEN,
        description="Rounding applied when a result exceeds the precision",
    )

    model_config = ConfigDict(frozen=True)

    def make_context(self) -> decimal.Context:
        """Build a fresh decimal context with the default traps enabled.

        InvalidOperation, DivisionByZero and Overflow raise; inexact and
        rounded results are allowed.
        """
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding.value,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )


def get_settings() -> CalcSettings:
    """Read settings from DECCALC_PRECISION and DECCALC_ROUNDING.

    Unset variables use the defaults. Invalid values are logged and
    replaced by the default for that field.

    Examples:
        >>> import os
        >>> os.environ["DECCALC_PRECISION"] = "50"
        >>> get_settings().precision
        50
    """
    values: dict[str, object] = {}

    raw_precision = os.environ.get(PRECISION_ENV_VAR, "").strip()
    if raw_precision:
        values["precision"] = raw_precision

    raw_rounding = os.environ.get(ROUNDING_ENV_VAR, "").strip().upper()
    if raw_rounding:
        if not raw_rounding.startswith("ROUND_"):
            raw_rounding = f"ROUND_{raw_rounding}"
        values["rounding"] = raw_rounding

    # Validate field by field so one bad variable doesn't discard the other
    validated: dict[str, object] = {}
    for name, raw in values.items():
        try:
            validated[name] = getattr(CalcSettings.model_validate({name: raw}), name)
        except ValidationError:
            logger.warning(
                "Invalid %s value '%s'. Using default: %s",
                PRECISION_ENV_VAR if name == "precision" else ROUNDING_ENV_VAR,
                raw,
                CalcSettings.model_fields[name].default,
            )
    return CalcSettings(**validated)
