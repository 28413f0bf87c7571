"""General utilities for RetirePlan

Contents
--------
- Decimal helpers (to_decimal, round_currency, high-precision context)
- Validation helpers (check_non_negative, check_positive_int)
- Rate conversions (annual percentage → monthly decimal)
- Date helpers (age_on)
- Reporting helpers (format_currency, format_percent)
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from decimal import Decimal, InvalidOperation, localcontext
from typing import Iterator, Optional, Union

from .constants import (
    CENTS,
    DECIMAL_PRECISION,
    PERCENT_PER_MONTH_DIVISOR,
    RATE_QUANTUM,
    ROUNDING,
)
from .exceptions import InvalidInputError

__all__ = [
    # Decimal
    "Number",
    "to_decimal",
    "round_currency",
    "money_context",
    # Validation
    "check_non_negative",
    "check_positive_int",
    # Rates
    "annual_percent_to_monthly",
    # Dates
    "age_on",
    # Reporting
    "format_currency",
    "format_percent",
]

Number = Union[Decimal, int, float, str]


# ---------------------------------------------------------------------------
# Decimal helpers
# ---------------------------------------------------------------------------

def to_decimal(value: Number, *, name: str = "value") -> Decimal:
    """Convert *value* to Decimal.

    Floats go through ``str`` so that ``7.1`` becomes ``Decimal('7.1')``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise InvalidInputError(f"{name} must be numeric (got {value!r}).")
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation:
            raise InvalidInputError(f"{name} must be numeric (got {value!r}).") from None
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        raise InvalidInputError(f"{name} must be numeric (got {type(value).__name__}).")
    if not result.is_finite():
        raise InvalidInputError(f"{name} must be finite (got {value!r}).")
    return result


def round_currency(value: Decimal) -> Decimal:
    """Round to cents using round-half-up."""
    return value.quantize(CENTS, rounding=ROUNDING)


@contextmanager
def money_context() -> Iterator[None]:
    """Local Decimal context with enough precision for long compounding."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        ctx.rounding = ROUNDING
        yield


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def check_non_negative(name: str, value: Decimal) -> None:
    """Raise if *value* is negative (strict)."""
    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative (got {value}).")


def check_positive_int(name: str, value: int) -> None:
    """Raise unless *value* is an int greater than zero."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an integer (got {value!r}).")
    if value <= 0:
        raise InvalidInputError(f"{name} must be positive (got {value}).")


# ---------------------------------------------------------------------------
# Rate conversions
# ---------------------------------------------------------------------------

def annual_percent_to_monthly(rate_percent: Decimal) -> Decimal:
    """Convert an annual percentage (7.0 = 7%) to a monthly decimal rate.

    Uses simple division, rate / 1200, held at 10 decimal places.
    """
    return (rate_percent / PERCENT_PER_MONTH_DIVISOR).quantize(RATE_QUANTUM, rounding=ROUNDING)


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------

def age_on(date_of_birth: Optional[date], as_of: date) -> Optional[int]:
    """Age as the difference in calendar years between *as_of* and birth.

    Returns None when no date of birth is known.
    """
    if date_of_birth is None:
        return None
    return as_of.year - date_of_birth.year


# ---------------------------------------------------------------------------
# Reporting helpers
# ---------------------------------------------------------------------------

def format_currency(value: Optional[Decimal], symbol: str = "$") -> str:
    """
    Format a currency amount for display.

    Examples
    --------
    >>> format_currency(Decimal("6200"))
    '$6,200.00'
    >>> format_currency(None)
    'N/A'
    """
    if value is None:
        return "N/A"
    return f"{symbol}{round_currency(value):,.2f}"


def format_percent(value: Union[int, Decimal]) -> str:
    """Format a whole or decimal percentage, e.g. ``80`` → ``'80%'``."""
    return f"{value}%"
