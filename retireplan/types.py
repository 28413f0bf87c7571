"""
Type definitions for RetirePlan.

Purpose
-------
Provides the closed enumerations used for computed categories and
TypedDict definitions for the serialized result shapes produced by
``retireplan.serialization``.

Usage
-----
>>> from retireplan.types import PlanStatus, RiskBand
>>>
>>> PlanStatus.ON_TRACK.value
'on_track'
>>> RiskBand.for_age(25)
<RiskBand.AGGRESSIVE: 'aggressive'>

Type Definitions
----------------
PlanStatus
    Projection outcome: ON_TRACK or BEHIND.

RiskBand
    Age-banded allocation profile: AGGRESSIVE, MODERATE, CONSERVATIVE.

PlanResultDict, BenefitResultDict, StrategyResultDict, ScenarioDict
    JSON shapes of computed results.
"""

from enum import Enum
from typing import List, Optional

from typing_extensions import NotRequired, TypedDict

__all__ = [
    "PlanStatus",
    "RiskBand",
    "PlanResultDict",
    "BenefitResultDict",
    "StrategyResultDict",
    "ScenarioDict",
]


class PlanStatus(str, Enum):
    """Whether the projected income covers the desired income."""

    ON_TRACK = "on_track"
    BEHIND = "behind"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class RiskBand(str, Enum):
    """
    Named investment-allocation profile tied to an age range.

    Bands use half-open intervals on age:
    ``age < 35`` → AGGRESSIVE, ``35 <= age < 55`` → MODERATE,
    ``age >= 55`` → CONSERVATIVE.
    """

    AGGRESSIVE = "aggressive"
    MODERATE = "moderate"
    CONSERVATIVE = "conservative"

    @property
    def strategy_name(self) -> str:
        return _STRATEGY_NAMES[self]

    @property
    def risk_level(self) -> str:
        return _RISK_LEVELS[self]

    @classmethod
    def for_age(cls, age: int) -> "RiskBand":
        """Return the band containing *age*."""
        if age < 35:
            return cls.AGGRESSIVE
        if age < 55:
            return cls.MODERATE
        return cls.CONSERVATIVE


_STRATEGY_NAMES = {
    RiskBand.AGGRESSIVE: "Aggressive Growth",
    RiskBand.MODERATE: "Moderate Growth",
    RiskBand.CONSERVATIVE: "Conservative",
}

_RISK_LEVELS = {
    RiskBand.AGGRESSIVE: "High",
    RiskBand.MODERATE: "Moderate",
    RiskBand.CONSERVATIVE: "Low",
}


class PlanResultDict(TypedDict):
    """
    Serialized RetirementPlan (inputs plus computed outputs).

    Currency values are strings with two decimal places so that no
    precision is lost in JSON.
    """

    user_id: Optional[int]
    current_age: int
    retirement_age: int
    expected_retirement_duration_years: int
    current_savings: str
    monthly_contribution: str
    employer_match: str
    desired_monthly_income: str
    expected_annual_return_rate_percent: str
    expected_annual_inflation_rate_percent: str
    years_to_retirement: NotRequired[Optional[int]]
    projected_balance: NotRequired[Optional[str]]
    projected_monthly_income: NotRequired[Optional[str]]
    inflation_adjusted_monthly_income: NotRequired[Optional[str]]
    status: NotRequired[Optional[str]]
    recommendation_text: NotRequired[Optional[str]]


class BenefitResultDict(TypedDict):
    """Serialized SocialSecurityProfile."""

    user_id: Optional[int]
    date_of_birth: Optional[str]
    current_annual_salary: str
    years_of_work_history: int
    current_age: Optional[int]
    benefit_at_62: Optional[str]
    benefit_at_67: Optional[str]
    benefit_at_70: Optional[str]
    full_retirement_age: int
    recommendation_text: Optional[str]


class StrategyResultDict(TypedDict):
    """Serialized InvestmentStrategy."""

    user_id: Optional[int]
    age: int
    portfolio_value: str
    risk_band: str
    strategy_name: str
    risk_level: str
    stocks_percent: int
    bonds_percent: int
    cash_percent: int
    stocks_amount: str
    bonds_amount: str
    cash_amount: str
    recommendation_text: str
    recommendations: List[str]


class ScenarioDict(TypedDict):
    """Serialized member of a ScenarioSet."""

    description: str
    plan: PlanResultDict
