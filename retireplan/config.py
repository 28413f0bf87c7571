"""
Configuration and request models for RetirePlan.

Purpose
-------
Pydantic models for the nullable, caller-supplied input that arrives from
outside the core (JSON files, the CLI, an HTTP layer), the explicit
``apply_defaults`` step, and application settings loaded from the
environment.

Design Principles
-----------------
- Type-safe: Pydantic enforces types and non-negative ranges
- Immutable: Frozen models prevent accidental mutation
- Explicit defaults: absent values stay None until the caller opts into
  ``apply_defaults``; sample figures never leak into a calculation silently
- Dual naming: fields accept snake_case and camelCase keys

Example
-------
>>> request = RetirementPlanRequest(current_age=42, retirement_age=65)
>>> request.to_plan()
Traceback (most recent call last):
MissingInputError: ...
>>> plan = apply_defaults(request).to_plan()
>>> plan.monthly_contribution
Decimal('650')
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    CONTRIBUTION_INCREASE_RATIO,
    DEFAULT_PORTFOLIO_VALUE,
    DEFAULT_RETIREMENT_DURATION_YEARS,
    DEFAULT_STRATEGY_AGE,
    PLAN_DEFAULTS,
    RETIREMENT_AGE_SHIFT_YEARS,
    SOCIAL_SECURITY_DEFAULTS,
)
from .exceptions import MissingInputError
from .logging import get_logger

__all__ = [
    "RetirementPlanRequest",
    "SocialSecurityRequest",
    "AllocationRequest",
    "Request",
    "apply_defaults",
    "AppSettings",
]

logger = get_logger(__name__)

_REQUEST_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


def _require(request: BaseModel, names) -> None:
    missing = [name for name in names if getattr(request, name) is None]
    if missing:
        raise MissingInputError(
            f"{type(request).__name__} is missing required values: {', '.join(missing)}. "
            "Pass them explicitly or opt into apply_defaults()."
        )


# ---------------------------------------------------------------------------
# Retirement plan request
# ---------------------------------------------------------------------------

class RetirementPlanRequest(BaseModel):
    """
    Caller input for a retirement projection.

    Attributes
    ----------
    current_age, retirement_age : int
        Required. Ordering is checked when the plan is built.
    current_savings, monthly_contribution, desired_monthly_income : Decimal, optional
        Required by ``to_plan`` unless filled by ``apply_defaults``.
    expected_annual_return_rate_percent : Decimal, optional
        Annual percentage (7.0 = 7%). Required by ``to_plan``.
    employer_match, expected_annual_inflation_rate_percent : Decimal, optional
        Treated as 0 when absent.
    expected_retirement_duration_years : int, optional
        Treated as 25 when absent.

    Examples
    --------
    >>> RetirementPlanRequest.model_validate(
    ...     {"currentAge": 42, "retirementAge": 65, "monthlyContribution": "650"}
    ... ).monthly_contribution
    Decimal('650')
    """

    model_config = _REQUEST_CONFIG

    kind: Literal["retirement_plan"] = "retirement_plan"
    user_id: Optional[int] = Field(default=None, gt=0, description="Caller-side user id")
    current_age: int = Field(gt=0, description="Age today")
    retirement_age: int = Field(gt=0, description="Planned retirement age")
    expected_retirement_duration_years: Optional[int] = Field(
        default=None, gt=0, description="Years in retirement"
    )
    current_savings: Optional[Decimal] = Field(
        default=None, ge=0, description="Current retirement savings"
    )
    monthly_contribution: Optional[Decimal] = Field(
        default=None, ge=0, description="Employee contribution per month"
    )
    employer_match: Optional[Decimal] = Field(
        default=None, ge=0, description="Employer contribution per month"
    )
    desired_monthly_income: Optional[Decimal] = Field(
        default=None, ge=0, description="Target monthly retirement income"
    )
    expected_annual_return_rate_percent: Optional[Decimal] = Field(
        default=None, ge=0, description="Expected annual return, percent"
    )
    expected_annual_inflation_rate_percent: Optional[Decimal] = Field(
        default=None, ge=0, description="Expected annual inflation, percent"
    )

    def to_plan(self):
        """
        Build a RetirementPlan.

        Raises
        ------
        MissingInputError
            If a required value is still None.
        InvalidInputError
            If the values are structurally invalid (e.g. ages out of order).
        """
        from .projection import RetirementPlan

        _require(self, (
            "current_savings",
            "monthly_contribution",
            "desired_monthly_income",
            "expected_annual_return_rate_percent",
        ))
        return RetirementPlan(
            user_id=self.user_id,
            current_age=self.current_age,
            retirement_age=self.retirement_age,
            current_savings=self.current_savings,
            monthly_contribution=self.monthly_contribution,
            employer_match=self.employer_match if self.employer_match is not None else Decimal("0"),
            desired_monthly_income=self.desired_monthly_income,
            expected_annual_return_rate_percent=self.expected_annual_return_rate_percent,
            expected_annual_inflation_rate_percent=(
                self.expected_annual_inflation_rate_percent
                if self.expected_annual_inflation_rate_percent is not None
                else Decimal("0")
            ),
            expected_retirement_duration_years=(
                self.expected_retirement_duration_years
                or DEFAULT_RETIREMENT_DURATION_YEARS
            ),
        )


# ---------------------------------------------------------------------------
# Social Security request
# ---------------------------------------------------------------------------

class SocialSecurityRequest(BaseModel):
    """Caller input for a Social Security estimate."""

    model_config = _REQUEST_CONFIG

    kind: Literal["social_security"] = "social_security"
    user_id: Optional[int] = Field(default=None, gt=0)
    date_of_birth: Optional[datetime.date] = Field(
        default=None, description="Needed only for the recommendation"
    )
    current_annual_salary: Optional[Decimal] = Field(
        default=None, ge=0, description="Current gross annual salary"
    )
    years_of_work_history: Optional[int] = Field(
        default=None, ge=0, description="Years of covered earnings"
    )

    def to_profile(self):
        """Build a SocialSecurityProfile; salary is required."""
        from .benefits import SocialSecurityProfile

        _require(self, ("current_annual_salary",))
        return SocialSecurityProfile(
            user_id=self.user_id,
            date_of_birth=self.date_of_birth,
            current_annual_salary=self.current_annual_salary,
            years_of_work_history=self.years_of_work_history or 0,
        )


# ---------------------------------------------------------------------------
# Allocation request
# ---------------------------------------------------------------------------

class AllocationRequest(BaseModel):
    """
    Caller input for an investment strategy.

    Either all three of ``stocks_percent``, ``bonds_percent`` and
    ``cash_percent`` are given (custom split) or none is (banded split).
    """

    model_config = _REQUEST_CONFIG

    kind: Literal["allocation"] = "allocation"
    user_id: Optional[int] = Field(default=None, gt=0)
    age: Optional[int] = Field(default=None, gt=0, description="Investor age")
    portfolio_value: Optional[Decimal] = Field(default=None, ge=0)
    stocks_percent: Optional[int] = None
    bonds_percent: Optional[int] = None
    cash_percent: Optional[int] = None

    @model_validator(mode="after")
    def validate_split_complete(self):
        """Ensure a custom split is all-or-nothing."""
        given = [
            v is not None
            for v in (self.stocks_percent, self.bonds_percent, self.cash_percent)
        ]
        if any(given) and not all(given):
            raise ValueError(
                "Specify all of stocks_percent, bonds_percent and cash_percent, or none"
            )
        return self

    @property
    def is_custom(self) -> bool:
        return self.stocks_percent is not None

    def require_portfolio_value(self) -> Decimal:
        _require(self, ("portfolio_value",))
        return self.portfolio_value


Request = Union[RetirementPlanRequest, SocialSecurityRequest, AllocationRequest]


# ---------------------------------------------------------------------------
# Explicit default substitution
# ---------------------------------------------------------------------------

_DEFAULT_TABLES: Dict[type, Dict[str, object]] = {
    RetirementPlanRequest: PLAN_DEFAULTS,
    SocialSecurityRequest: SOCIAL_SECURITY_DEFAULTS,
    AllocationRequest: {"portfolio_value": DEFAULT_PORTFOLIO_VALUE},
}


def apply_defaults(request: Request) -> Request:
    """
    Fill absent fields of *request* from the documented default table.

    Only fields that are None are replaced; explicit values, including
    zero, are kept. Every substitution is logged at INFO so that sample
    data standing in for real user data stays visible.

    Parameters
    ----------
    request : RetirementPlanRequest | SocialSecurityRequest | AllocationRequest

    Returns
    -------
    Same type as *request*, a new instance.
    """
    table = _DEFAULT_TABLES.get(type(request))
    if table is None:
        raise TypeError(f"No default table for {type(request).__name__}")

    updates = {
        name: value for name, value in table.items()
        if getattr(request, name) is None
    }
    if not updates:
        return request

    logger.info(
        "defaults_applied",
        request=type(request).__name__,
        user_id=request.user_id,
        fields=sorted(updates),
    )
    return request.model_copy(update=updates)


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    are prefixed with RETIREPLAN_ (e.g., RETIREPLAN_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    debug : bool
        Enable debug mode (forces DEBUG logging).
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR".
    log_json : bool
        Render log events as JSON lines.
    use_defaults : bool
        Make the CLI apply the default tables unless told otherwise.
    contribution_increase_ratio : Decimal
        Scenario A contribution multiplier.
    retirement_age_shift : int
        Scenario B/C retirement age shift in years.
    default_strategy_age : int
        Age assumed by the allocation strategist when none is given.

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="RETIREPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    log_json: bool = Field(default=False, description="Render logs as JSON")
    use_defaults: bool = Field(
        default=False,
        description="Apply the sample default tables to absent inputs"
    )
    contribution_increase_ratio: Decimal = Field(
        default=CONTRIBUTION_INCREASE_RATIO,
        gt=0,
        description="Scenario A contribution multiplier"
    )
    retirement_age_shift: int = Field(
        default=RETIREMENT_AGE_SHIFT_YEARS,
        ge=1,
        le=10,
        description="Scenario B/C retirement age shift (years)"
    )
    default_strategy_age: int = Field(
        default=DEFAULT_STRATEGY_AGE,
        gt=0,
        description="Age assumed when none is supplied"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
