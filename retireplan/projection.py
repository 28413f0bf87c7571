"""
Retirement projection engine for RetirePlan.

Purpose
-------
Compounds a starting balance and a stream of monthly contributions forward
to the retirement age, and derives a sustainable monthly income from the
resulting balance with the 4% rule.

Mathematical Framework
----------------------
With n = 12·(retirement_age - current_age) months, monthly rate
r = annual_rate / 1200 and monthly contribution c = contribution + match:

    FV_savings       = S·(1 + r)^n
    FV_contributions = c·((1 + r)^n - 1) / r      if r > 0
                     = c·n                         if r = 0
    B                = FV_savings + FV_contributions
    income           = B·0.04 / 12

The r = 0 branch is the limit of the annuity formula and avoids division
by zero.

Key components
--------------
- RetirementPlan:
    Immutable record holding caller inputs and, once projected, the
    computed outputs. ``project`` never mutates; it returns a new record.

- ProjectionEngine:
    Stateless calculator. ``project`` produces the cents-exact Decimal
    result; ``balance_schedule`` produces a year-by-year float table for
    charts and reports.

Example
-------
>>> from decimal import Decimal
>>> plan = RetirementPlan(
...     current_age=42,
...     retirement_age=65,
...     current_savings=Decimal("106965.67"),
...     monthly_contribution=Decimal("650"),
...     employer_match=Decimal("325"),
...     desired_monthly_income=Decimal("6200"),
...     expected_annual_return_rate_percent=Decimal("7.0"),
... )
>>> result = ProjectionEngine().project(plan)
>>> result.years_to_retirement
23
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from .constants import (
    DEFAULT_RETIREMENT_DURATION_YEARS,
    MONTHS_PER_YEAR,
    SAFE_WITHDRAWAL_RATE,
)
from .exceptions import InvalidInputError
from .logging import get_logger
from .types import PlanStatus
from .utils import (
    Number,
    annual_percent_to_monthly,
    check_non_negative,
    check_positive_int,
    money_context,
    round_currency,
    to_decimal,
)

__all__ = [
    "RetirementPlan",
    "ProjectionEngine",
    "ON_TRACK_RECOMMENDATION",
    "BEHIND_RECOMMENDATION",
]

logger = get_logger(__name__)

ON_TRACK_RECOMMENDATION = "Great job! You're on track to meet your retirement goals."
BEHIND_RECOMMENDATION = (
    "Consider increasing your monthly contributions to meet your retirement goals."
)

_CURRENCY_FIELDS = (
    "current_savings",
    "monthly_contribution",
    "employer_match",
    "desired_monthly_income",
)
_RATE_FIELDS = (
    "expected_annual_return_rate_percent",
    "expected_annual_inflation_rate_percent",
)


# ---------------------------------------------------------------------------
# Retirement Plan
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RetirementPlan:
    """
    Retirement plan inputs and (after projection) computed outputs.

    Parameters
    ----------
    current_age, retirement_age : int
        Positive integers with ``retirement_age > current_age``.
    current_savings : Decimal
        Balance today (>= 0).
    monthly_contribution : Decimal
        Employee contribution per month (>= 0).
    desired_monthly_income : Decimal
        Target retirement income per month (>= 0).
    expected_annual_return_rate_percent : Decimal
        Annual return as a percentage, ``7.0`` meaning 7% (>= 0).
    employer_match : Decimal, default 0
        Employer contribution per month (>= 0).
    expected_annual_inflation_rate_percent : Decimal, default 0
        Annual inflation as a percentage (>= 0).
    expected_retirement_duration_years : int, default 25
        Years the balance is expected to last.
    user_id : int, optional
        Caller-side identifier, carried through untouched.

    Computed fields (None until projected): ``years_to_retirement``,
    ``projected_balance``, ``projected_monthly_income``,
    ``inflation_adjusted_monthly_income``, ``status``,
    ``recommendation_text``.

    Notes
    -----
    Numeric inputs may be given as int, float, str or Decimal; they are
    normalised to Decimal. Invalid values raise InvalidInputError during
    construction, so a RetirementPlan instance is always structurally valid.
    """
    current_age: int
    retirement_age: int
    current_savings: Decimal
    monthly_contribution: Decimal
    desired_monthly_income: Decimal
    expected_annual_return_rate_percent: Decimal
    employer_match: Decimal = Decimal("0")
    expected_annual_inflation_rate_percent: Decimal = Decimal("0")
    expected_retirement_duration_years: int = DEFAULT_RETIREMENT_DURATION_YEARS
    user_id: Optional[int] = None
    # Computed
    years_to_retirement: Optional[int] = None
    projected_balance: Optional[Decimal] = None
    projected_monthly_income: Optional[Decimal] = None
    inflation_adjusted_monthly_income: Optional[Decimal] = None
    status: Optional[PlanStatus] = None
    recommendation_text: Optional[str] = None

    def __post_init__(self):
        """Normalise numeric inputs and validate structure."""
        check_positive_int("current_age", self.current_age)
        check_positive_int("retirement_age", self.retirement_age)
        if self.retirement_age <= self.current_age:
            raise InvalidInputError(
                f"retirement_age ({self.retirement_age}) must be greater than "
                f"current_age ({self.current_age})."
            )
        check_positive_int(
            "expected_retirement_duration_years", self.expected_retirement_duration_years
        )

        for name in _CURRENCY_FIELDS + _RATE_FIELDS:
            value = to_decimal(getattr(self, name), name=name)
            check_non_negative(name, value)
            object.__setattr__(self, name, value)

    @property
    def total_months(self) -> int:
        return (self.retirement_age - self.current_age) * MONTHS_PER_YEAR

    @property
    def total_monthly_contribution(self) -> Decimal:
        return self.monthly_contribution + self.employer_match

    @property
    def is_projected(self) -> bool:
        return self.projected_balance is not None

    def with_inputs(self, **changes: Number) -> "RetirementPlan":
        """
        Return a copy with some inputs changed and computed fields cleared.

        Used to derive what-if variants from an already projected plan.
        """
        return replace(
            self,
            years_to_retirement=None,
            projected_balance=None,
            projected_monthly_income=None,
            inflation_adjusted_monthly_income=None,
            status=None,
            recommendation_text=None,
            **changes,
        )


# ---------------------------------------------------------------------------
# Projection Engine
# ---------------------------------------------------------------------------

class ProjectionEngine:
    """
    Stateless compound-growth projection.

    Parameters
    ----------
    withdrawal_rate : Decimal, default 0.04
        Annual fraction of the balance considered sustainable income.
    """

    def __init__(self, withdrawal_rate: Number = SAFE_WITHDRAWAL_RATE):
        rate = to_decimal(withdrawal_rate, name="withdrawal_rate")
        if rate <= 0:
            raise InvalidInputError(f"withdrawal_rate must be positive (got {rate}).")
        self.withdrawal_rate = rate

    def __repr__(self) -> str:
        return f"ProjectionEngine(withdrawal_rate={self.withdrawal_rate})"

    def future_values(self, plan: RetirementPlan) -> Tuple[Decimal, Decimal]:
        """
        Future value of current savings and of the contribution stream.

        Returns
        -------
        (fv_savings, fv_contributions) : tuple of Decimal
            fv_savings is unrounded; fv_contributions is rounded to cents on
            the r > 0 branch and exact on the r = 0 branch.
        """
        n = plan.total_months
        with money_context():
            r = annual_percent_to_monthly(plan.expected_annual_return_rate_percent)
            c = plan.total_monthly_contribution
            growth = (Decimal(1) + r) ** n
            fv_savings = plan.current_savings * growth
            if r > 0:
                fv_contributions = round_currency(c * (growth - 1) / r)
            else:
                fv_contributions = c * n
        return fv_savings, fv_contributions

    def project(self, plan: RetirementPlan) -> RetirementPlan:
        """
        Project *plan* to retirement.

        Parameters
        ----------
        plan : RetirementPlan
            Fully populated plan (defaults, if any, already applied).

        Returns
        -------
        RetirementPlan
            New instance with all computed fields set.
        """
        years = plan.retirement_age - plan.current_age
        fv_savings, fv_contributions = self.future_values(plan)

        with money_context():
            balance = round_currency(fv_savings + fv_contributions)
            income = round_currency(
                balance * self.withdrawal_rate / MONTHS_PER_YEAR
            )
            deflator = (
                Decimal(1) + plan.expected_annual_inflation_rate_percent / 100
            ) ** years
            real_income = round_currency(income / deflator)

        if income >= plan.desired_monthly_income:
            status = PlanStatus.ON_TRACK
            recommendation = ON_TRACK_RECOMMENDATION
        else:
            status = PlanStatus.BEHIND
            recommendation = BEHIND_RECOMMENDATION

        logger.debug(
            "plan_projected",
            user_id=plan.user_id,
            years_to_retirement=years,
            projected_balance=str(balance),
            projected_monthly_income=str(income),
            status=status.value,
        )

        return replace(
            plan,
            years_to_retirement=years,
            projected_balance=balance,
            projected_monthly_income=income,
            inflation_adjusted_monthly_income=real_income,
            status=status,
            recommendation_text=recommendation,
        )

    def balance_schedule(self, plan: RetirementPlan) -> pd.DataFrame:
        """
        Year-by-year balance path from today to retirement.

        Uses the same closed-form formulas as ``project`` evaluated at every
        whole year, in floating point. Intended for charts and reports; use
        ``project`` for the authoritative cents-exact figures.

        Returns
        -------
        pd.DataFrame
            Indexed by ``year`` (0 = today), with columns ``age``,
            ``balance``, ``contributions`` (savings plus cumulative
            contributions) and ``growth`` (balance - contributions).
        """
        years = plan.retirement_age - plan.current_age
        year_idx = np.arange(years + 1)
        months = year_idx * MONTHS_PER_YEAR

        r = float(annual_percent_to_monthly(plan.expected_annual_return_rate_percent))
        c = float(plan.total_monthly_contribution)
        s = float(plan.current_savings)

        growth = (1.0 + r) ** months
        if r > 0:
            fv_contrib = c * (growth - 1.0) / r
        else:
            fv_contrib = c * months.astype(float)
        balance = s * growth + fv_contrib
        contributed = s + c * months.astype(float)

        df = pd.DataFrame(
            {
                "age": plan.current_age + year_idx,
                "balance": balance,
                "contributions": contributed,
                "growth": balance - contributed,
            },
            index=pd.Index(year_idx, name="year"),
        )
        return df
