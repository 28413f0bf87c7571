"""
Pytest configuration and fixtures for RetirePlan test suite.

This module provides reusable fixtures for testing all RetirePlan components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.
"""

from datetime import date
from decimal import Decimal

import matplotlib
import pytest

matplotlib.use("Agg")

from retireplan.allocation import AllocationStrategist
from retireplan.benefits import BenefitEstimator, SocialSecurityProfile
from retireplan.config import AllocationRequest, RetirementPlanRequest, SocialSecurityRequest
from retireplan.planner import PlanningService
from retireplan.projection import ProjectionEngine, RetirementPlan
from retireplan.scenario import ScenarioComparator


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def as_of() -> date:
    """Fixed measurement date so ages are reproducible."""
    return date(2025, 1, 1)


# ---------------------------------------------------------------------------
# Plan Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_plan() -> RetirementPlan:
    """
    Reference plan used across projection and scenario tests.

    Age 42 → 65, savings 106,965.67, contributions 650 + 325 match,
    7% return, desired income 6,200.
    """
    return RetirementPlan(
        user_id=1,
        current_age=42,
        retirement_age=65,
        current_savings=Decimal("106965.67"),
        monthly_contribution=Decimal("650"),
        employer_match=Decimal("325"),
        desired_monthly_income=Decimal("6200"),
        expected_annual_return_rate_percent=Decimal("7.0"),
    )


@pytest.fixture
def zero_rate_plan() -> RetirementPlan:
    """Plan with no investment growth: balance is savings + contributions."""
    return RetirementPlan(
        current_age=30,
        retirement_age=40,
        current_savings=Decimal("1000"),
        monthly_contribution=Decimal("100"),
        employer_match=Decimal("50"),
        desired_monthly_income=Decimal("500"),
        expected_annual_return_rate_percent=Decimal("0"),
    )


@pytest.fixture
def sample_profile() -> SocialSecurityProfile:
    """Social Security profile with a 78,000 salary."""
    return SocialSecurityProfile(
        user_id=1,
        date_of_birth=date(1983, 5, 15),
        current_annual_salary=Decimal("78000"),
        years_of_work_history=20,
    )


# ---------------------------------------------------------------------------
# Component Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def engine() -> ProjectionEngine:
    return ProjectionEngine()


@pytest.fixture
def estimator() -> BenefitEstimator:
    return BenefitEstimator()


@pytest.fixture
def strategist() -> AllocationStrategist:
    return AllocationStrategist()


@pytest.fixture
def comparator(engine) -> ScenarioComparator:
    return ScenarioComparator(engine=engine)


@pytest.fixture
def service() -> PlanningService:
    return PlanningService()


# ---------------------------------------------------------------------------
# Request Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def plan_request() -> RetirementPlanRequest:
    """Fully populated plan request (no defaults needed)."""
    return RetirementPlanRequest(
        user_id=1,
        current_age=42,
        retirement_age=65,
        current_savings=Decimal("106965.67"),
        monthly_contribution=Decimal("650"),
        employer_match=Decimal("325"),
        desired_monthly_income=Decimal("6200"),
        expected_annual_return_rate_percent=Decimal("7.0"),
    )


@pytest.fixture
def benefit_request() -> SocialSecurityRequest:
    return SocialSecurityRequest(
        user_id=1,
        date_of_birth=date(1983, 5, 15),
        current_annual_salary=Decimal("78000"),
        years_of_work_history=20,
    )


@pytest.fixture
def allocation_request() -> AllocationRequest:
    return AllocationRequest(user_id=1, age=25, portfolio_value=Decimal("106965"))
