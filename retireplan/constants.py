"""
Global constants for RetirePlan.

Purpose
-------
Centralizes default values and magic numbers used throughout the RetirePlan
codebase: projection heuristics, Social Security scaling factors, the
age-band allocation table inputs and the opt-in default tables.

Usage
-----
>>> from retireplan.constants import SAFE_WITHDRAWAL_RATE, PLAN_DEFAULTS
>>>
>>> annual_income = balance * SAFE_WITHDRAWAL_RATE
>>> PLAN_DEFAULTS["monthly_contribution"]
Decimal('650')

Categories
----------
- Money: Decimal scales and rounding
- Projection: withdrawal rule, rate conversion
- Social Security: claim ages and benefit factors
- Allocation: default strategy age, suggested actions
- Scenarios: what-if adjustments
- Defaults: documented substitution tables used by apply_defaults()
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Tuple

__all__ = [
    # Money
    "CENTS",
    "RATE_QUANTUM",
    "ROUNDING",
    "DECIMAL_PRECISION",
    # Projection
    "MONTHS_PER_YEAR",
    "PERCENT_PER_MONTH_DIVISOR",
    "SAFE_WITHDRAWAL_RATE",
    "DEFAULT_RETIREMENT_DURATION_YEARS",
    # Social Security
    "BENEFIT_REPLACEMENT_RATE",
    "EARLY_CLAIM_AGE",
    "FULL_RETIREMENT_AGE",
    "DELAYED_CLAIM_AGE",
    "EARLY_CLAIM_FACTOR",
    "DELAYED_CLAIM_FACTOR",
    # Allocation
    "DEFAULT_STRATEGY_AGE",
    "ALLOCATION_TOTAL_PERCENT",
    "SUGGESTED_ALLOCATION_ACTIONS",
    # Scenarios
    "CONTRIBUTION_INCREASE_RATIO",
    "RETIREMENT_AGE_SHIFT_YEARS",
    # Defaults
    "PLAN_DEFAULTS",
    "SOCIAL_SECURITY_DEFAULTS",
    "DEFAULT_PORTFOLIO_VALUE",
]


# =============================================================================
# Money
# =============================================================================

CENTS: Decimal = Decimal("0.01")
"""Quantum for every currency output (2-digit scale)."""

RATE_QUANTUM: Decimal = Decimal("1E-10")
"""Quantum for the derived monthly rate (10 decimal places)."""

ROUNDING: str = ROUND_HALF_UP
"""Rounding mode for all currency outputs."""

DECIMAL_PRECISION: int = 60
"""Significant digits for intermediate Decimal arithmetic.

Compounding over several hundred months produces long mantissas; 60 digits
keeps the final cents exact.
"""


# =============================================================================
# Projection
# =============================================================================

MONTHS_PER_YEAR: int = 12
"""Number of months in a year."""

PERCENT_PER_MONTH_DIVISOR: Decimal = Decimal("1200")
"""Converts an annual percentage (7.0) into a monthly decimal rate."""

SAFE_WITHDRAWAL_RATE: Decimal = Decimal("0.04")
"""Annual withdrawal fraction of the 4% rule."""

DEFAULT_RETIREMENT_DURATION_YEARS: int = 25
"""Expected years in retirement when the caller does not specify one."""


# =============================================================================
# Social Security
# =============================================================================

BENEFIT_REPLACEMENT_RATE: Decimal = Decimal("0.40")
"""Flat share of current salary replaced by the full-age benefit."""

EARLY_CLAIM_AGE: int = 62
"""Earliest claim age."""

FULL_RETIREMENT_AGE: int = 67
"""Full retirement age (100% of the base benefit)."""

DELAYED_CLAIM_AGE: int = 70
"""Latest claim age that still earns delayed credits."""

EARLY_CLAIM_FACTOR: Decimal = Decimal("0.75")
"""Benefit at 62 as a fraction of the full benefit."""

DELAYED_CLAIM_FACTOR: Decimal = Decimal("1.32")
"""Benefit at 70 as a fraction of the full benefit."""


# =============================================================================
# Allocation
# =============================================================================

DEFAULT_STRATEGY_AGE: int = 42
"""Age used when no age is supplied. Falls into the Moderate band."""

ALLOCATION_TOTAL_PERCENT: int = 100
"""Required sum of stock, bond and cash percentages."""

SUGGESTED_ALLOCATION_ACTIONS: Tuple[str, ...] = (
    "Diversify across asset classes",
    "Rebalance portfolio quarterly",
    "Consider low-cost index funds",
    "Review allocation annually",
)
"""Static recommendation list attached to every strategy."""


# =============================================================================
# Scenarios
# =============================================================================

CONTRIBUTION_INCREASE_RATIO: Decimal = Decimal("1.2")
"""Multiplier applied to the baseline contribution in scenario A."""

RETIREMENT_AGE_SHIFT_YEARS: int = 2
"""Years subtracted (scenario B) or added (scenario C) to retirement age."""


# =============================================================================
# Opt-in default tables
# =============================================================================

PLAN_DEFAULTS: Dict[str, object] = {
    "current_savings": Decimal("106965.67"),
    "monthly_contribution": Decimal("650"),
    "employer_match": Decimal("325"),
    "expected_annual_return_rate_percent": Decimal("7.0"),
    "desired_monthly_income": Decimal("6200"),
}
"""Sample values substituted by apply_defaults() for absent plan fields.

These are demonstration figures, not derived from any user data.
"""

SOCIAL_SECURITY_DEFAULTS: Dict[str, object] = {
    "date_of_birth": date(1983, 5, 15),
    "current_annual_salary": Decimal("78000"),
    "years_of_work_history": 20,
}
"""Sample values substituted by apply_defaults() for absent profile fields."""

DEFAULT_PORTFOLIO_VALUE: Decimal = Decimal("106965")
"""Sample portfolio value substituted by apply_defaults() for allocations."""
