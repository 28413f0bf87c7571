"""
Social Security benefit estimation for RetirePlan.

Purpose
-------
Scales a flat salary-based estimate of the full-age monthly benefit to the
three claim ages (62, 67, 70) and picks a recommendation banded by the
person's current age.

Heuristic
---------
    base        = salary·0.40 / 12        (full benefit, claimed at 67, cents)
    benefit@62  = base·0.75
    benefit@67  = base
    benefit@70  = base·1.32

This is not an SSA primary-insurance-amount computation; it is a
planning-grade approximation.

Example
-------
>>> from datetime import date
>>> profile = SocialSecurityProfile(
...     date_of_birth=date(1983, 5, 15),
...     current_annual_salary=Decimal("78000"),
...     years_of_work_history=20,
... )
>>> result = BenefitEstimator().estimate(profile, as_of=date(2025, 1, 1))
>>> result.benefit_at_67
Decimal('2600.00')
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Optional

from .constants import (
    BENEFIT_REPLACEMENT_RATE,
    DELAYED_CLAIM_AGE,
    DELAYED_CLAIM_FACTOR,
    EARLY_CLAIM_AGE,
    EARLY_CLAIM_FACTOR,
    FULL_RETIREMENT_AGE,
    MONTHS_PER_YEAR,
)
from .exceptions import InvalidInputError
from .logging import get_logger
from .utils import (
    age_on,
    check_non_negative,
    money_context,
    round_currency,
    to_decimal,
)

__all__ = [
    "SocialSecurityProfile",
    "BenefitEstimator",
    "recommendation_for_age",
]

logger = get_logger(__name__)

_BEFORE_EARLY_AGE = (
    "Continue working and building your earnings record. "
    "Consider delaying Social Security until full retirement age for maximum benefits."
)
_BEFORE_FULL_AGE = (
    "You can claim reduced benefits now, but waiting until "
    f"full retirement age ({FULL_RETIREMENT_AGE}) will give you 100% of your benefit."
)
_AT_OR_PAST_FULL_AGE = (
    "You're at or past full retirement age. "
    f"Delaying until age {DELAYED_CLAIM_AGE} can increase your benefits by up to 32%."
)


def recommendation_for_age(age: Optional[int]) -> Optional[str]:
    """Claiming advice for a person of *age*; None when age is unknown."""
    if age is None:
        return None
    if age < EARLY_CLAIM_AGE:
        return _BEFORE_EARLY_AGE
    if age < FULL_RETIREMENT_AGE:
        return _BEFORE_FULL_AGE
    return _AT_OR_PAST_FULL_AGE


@dataclass(frozen=True)
class SocialSecurityProfile:
    """
    Social Security inputs and (after estimation) computed benefits.

    Parameters
    ----------
    current_annual_salary : Decimal
        Current gross annual salary (>= 0).
    years_of_work_history : int
        Years of covered earnings (>= 0). Carried through; the flat
        heuristic does not use it.
    date_of_birth : date, optional
        Needed for the age-banded recommendation only.
    user_id : int, optional
        Caller-side identifier.
    """
    current_annual_salary: Decimal
    years_of_work_history: int = 0
    date_of_birth: Optional[date] = None
    user_id: Optional[int] = None
    # Computed
    current_age: Optional[int] = None
    benefit_at_62: Optional[Decimal] = None
    benefit_at_67: Optional[Decimal] = None
    benefit_at_70: Optional[Decimal] = None
    full_retirement_age: int = FULL_RETIREMENT_AGE
    recommendation_text: Optional[str] = None

    def __post_init__(self):
        salary = to_decimal(self.current_annual_salary, name="current_annual_salary")
        check_non_negative("current_annual_salary", salary)
        object.__setattr__(self, "current_annual_salary", salary)

        years = self.years_of_work_history
        if isinstance(years, bool) or not isinstance(years, int):
            raise InvalidInputError(
                f"years_of_work_history must be an integer (got {years!r})."
            )
        if years < 0:
            raise InvalidInputError(
                f"years_of_work_history must be non-negative (got {years})."
            )

    @property
    def benefits_by_claim_age(self) -> dict:
        """Mapping claim age → monthly benefit."""
        return {
            EARLY_CLAIM_AGE: self.benefit_at_62,
            FULL_RETIREMENT_AGE: self.benefit_at_67,
            DELAYED_CLAIM_AGE: self.benefit_at_70,
        }


class BenefitEstimator:
    """Stateless Social Security benefit estimator."""

    def base_monthly_benefit(self, annual_salary: Decimal) -> Decimal:
        """Full-age monthly benefit: 40% of salary spread over 12 months."""
        with money_context():
            return round_currency(annual_salary * BENEFIT_REPLACEMENT_RATE / MONTHS_PER_YEAR)

    def estimate(
        self,
        profile: SocialSecurityProfile,
        as_of: Optional[date] = None,
    ) -> SocialSecurityProfile:
        """
        Estimate benefits at 62, 67 and 70.

        Parameters
        ----------
        profile : SocialSecurityProfile
            Input profile.
        as_of : date, optional
            Date the current age is measured on. Defaults to today; pass it
            explicitly for reproducible results.

        Returns
        -------
        SocialSecurityProfile
            New instance with benefits, age and recommendation set.
            Without a date of birth, ``current_age`` and
            ``recommendation_text`` stay None.
        """
        as_of = as_of or date.today()
        base = self.base_monthly_benefit(profile.current_annual_salary)

        # Not re-rounded: both are exact multiples of the cent-rounded base
        with money_context():
            at_62 = base * EARLY_CLAIM_FACTOR
            at_70 = base * DELAYED_CLAIM_FACTOR

        age = age_on(profile.date_of_birth, as_of)
        if age is None:
            logger.debug("benefit_recommendation_skipped", reason="no date_of_birth")

        logger.debug(
            "benefits_estimated",
            user_id=profile.user_id,
            current_age=age,
            benefit_at_67=str(base),
        )

        return replace(
            profile,
            current_age=age,
            benefit_at_62=at_62,
            benefit_at_67=base,
            benefit_at_70=at_70,
            full_retirement_age=FULL_RETIREMENT_AGE,
            recommendation_text=recommendation_for_age(age),
        )
