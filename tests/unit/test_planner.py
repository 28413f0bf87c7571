"""
Unit tests for planner.py module.

Tests PlanningService request handling, opt-in defaults, custom
allocations and the combined dashboard.
"""

from decimal import Decimal

import pytest

from retireplan.allocation import AllocationStrategist
from retireplan.config import (
    AllocationRequest,
    AppSettings,
    RetirementPlanRequest,
    SocialSecurityRequest,
)
from retireplan.exceptions import AllocationConstraintError, MissingInputError
from retireplan.planner import PlanningDashboard, PlanningService
from retireplan.projection import ProjectionEngine
from retireplan.types import PlanStatus, RiskBand


class TestPlanningServiceConstruction:
    """Test explicit component wiring."""

    def test_default_components(self, service):
        assert isinstance(service.engine, ProjectionEngine)
        assert service.comparator.engine is service.engine

    def test_injected_components(self):
        engine = ProjectionEngine(withdrawal_rate="0.03")
        strategist = AllocationStrategist(default_age=60)
        service = PlanningService(engine=engine, strategist=strategist)

        assert service.engine is engine
        assert service.strategist is strategist
        assert service.comparator.engine is engine

    def test_from_settings(self, monkeypatch):
        monkeypatch.setenv("RETIREPLAN_RETIREMENT_AGE_SHIFT", "5")
        monkeypatch.setenv("RETIREPLAN_DEFAULT_STRATEGY_AGE", "60")
        service = PlanningService.from_settings(AppSettings(_env_file=None))

        assert service.comparator.retirement_shift == 5
        assert service.strategist.default_age == 60
        assert service.comparator.engine is service.engine


class TestSingleCalculations:
    """Test the per-calculator methods."""

    def test_retirement_plan(self, service, plan_request):
        plan = service.retirement_plan(plan_request)
        assert plan.years_to_retirement == 23
        assert plan.status is PlanStatus.BEHIND

    def test_retirement_plan_without_defaults_fails(self, service):
        with pytest.raises(MissingInputError):
            service.retirement_plan(RetirementPlanRequest(current_age=42, retirement_age=65))

    def test_retirement_plan_with_defaults(self, service, plan_request):
        sparse = RetirementPlanRequest(user_id=1, current_age=42, retirement_age=65)
        assert service.retirement_plan(sparse, use_defaults=True) == \
            service.retirement_plan(plan_request)

    def test_social_security(self, service, benefit_request, as_of):
        profile = service.social_security(benefit_request, as_of=as_of)
        assert profile.benefit_at_67 == Decimal("2600.00")
        assert profile.current_age == 42

    def test_banded_strategy(self, service, allocation_request):
        strategy = service.investment_strategy(allocation_request)
        assert strategy.risk_band is RiskBand.AGGRESSIVE
        assert strategy.stocks_amount == Decimal("85572.00")

    def test_custom_strategy(self, service):
        request = AllocationRequest(
            age=30, portfolio_value=10000, stocks_percent=50, bonds_percent=40, cash_percent=10
        )
        strategy = service.investment_strategy(request)
        assert strategy.bonds_amount == Decimal("4000.00")

    def test_custom_strategy_bad_sum(self, service):
        request = AllocationRequest(
            age=30, portfolio_value=10000, stocks_percent=50, bonds_percent=40, cash_percent=5
        )
        with pytest.raises(AllocationConstraintError, match="currently 95%"):
            service.investment_strategy(request)

    def test_scenarios(self, service, plan_request):
        scenarios = service.scenarios(plan_request)
        assert scenarios["scenarioA"].plan.monthly_contribution == Decimal("780.00")

    def test_scenarios_with_override(self, service, plan_request):
        scenarios = service.scenarios(plan_request, increased_contribution=Decimal("900"))
        assert scenarios["scenarioA"].plan.monthly_contribution == Decimal("900")


class TestDashboard:
    """Test PlanningService.dashboard."""

    def test_dashboard_with_defaults(self, service, as_of):
        dashboard = service.dashboard(
            RetirementPlanRequest(current_age=42, retirement_age=65),
            SocialSecurityRequest(),
            AllocationRequest(),
            use_defaults=True,
            as_of=as_of,
        )

        assert isinstance(dashboard, PlanningDashboard)
        assert dashboard.retirement_plan.status is PlanStatus.BEHIND
        assert dashboard.social_security.benefit_at_67 == Decimal("2600.00")
        # Allocation age follows the plan
        assert dashboard.investment_strategy.age == 42
        assert dashboard.investment_strategy.risk_band is RiskBand.MODERATE

    def test_summary(self, service, plan_request, benefit_request, as_of):
        dashboard = service.dashboard(
            plan_request,
            benefit_request,
            AllocationRequest(portfolio_value=Decimal("106965")),
            as_of=as_of,
        )
        summary = dashboard.summary

        assert summary["social_security_benefit"] == "$2,600.00"
        assert summary["portfolio_value"] == "$106,965.00"
        assert summary["overall_status"] == "behind"
        assert summary["projected_retirement_income"].startswith("$")

    def test_explicit_allocation_age_wins(self, service, plan_request, benefit_request, as_of):
        dashboard = service.dashboard(
            plan_request,
            benefit_request,
            AllocationRequest(age=25, portfolio_value=Decimal("1000")),
            as_of=as_of,
        )
        assert dashboard.investment_strategy.risk_band is RiskBand.AGGRESSIVE
