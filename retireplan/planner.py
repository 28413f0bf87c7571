"""
Planning service for RetirePlan.

Purpose
-------
Composes the four calculators behind one object. Components are passed in
explicitly (or built from AppSettings); nothing is looked up globally.
Accepts the nullable request models, applies the default tables only when
asked to, and assembles the combined planning dashboard.

Example
-------
>>> service = PlanningService()
>>> dashboard = service.dashboard(
...     RetirementPlanRequest(current_age=42, retirement_age=65),
...     SocialSecurityRequest(),
...     AllocationRequest(age=42),
...     use_defaults=True,
...     as_of=date(2025, 1, 1),
... )
>>> dashboard.summary["overall_status"]
'behind'
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Optional

from .allocation import AllocationStrategist, InvestmentStrategy
from .benefits import BenefitEstimator, SocialSecurityProfile
from .config import (
    AllocationRequest,
    AppSettings,
    RetirementPlanRequest,
    SocialSecurityRequest,
    apply_defaults,
)
from .logging import get_logger
from .projection import ProjectionEngine, RetirementPlan
from .scenario import ScenarioComparator, ScenarioSet
from .utils import format_currency

__all__ = ["PlanningDashboard", "PlanningService"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlanningDashboard:
    """Retirement plan, Social Security estimate and strategy side by side."""
    retirement_plan: RetirementPlan
    social_security: SocialSecurityProfile
    investment_strategy: InvestmentStrategy

    @property
    def summary(self) -> Dict[str, str]:
        """Headline figures formatted for display."""
        return {
            "projected_retirement_income": format_currency(
                self.retirement_plan.projected_monthly_income
            ),
            "social_security_benefit": format_currency(self.social_security.benefit_at_67),
            "portfolio_value": format_currency(self.investment_strategy.portfolio_value),
            "overall_status": self.retirement_plan.status.value,
        }


class PlanningService:
    """
    Request-level facade over the four calculators.

    Parameters
    ----------
    engine : ProjectionEngine, optional
    estimator : BenefitEstimator, optional
    strategist : AllocationStrategist, optional
    comparator : ScenarioComparator, optional
        Defaults to a comparator sharing ``engine``.
    """

    def __init__(
        self,
        engine: Optional[ProjectionEngine] = None,
        estimator: Optional[BenefitEstimator] = None,
        strategist: Optional[AllocationStrategist] = None,
        comparator: Optional[ScenarioComparator] = None,
    ):
        self.engine = engine or ProjectionEngine()
        self.estimator = estimator or BenefitEstimator()
        self.strategist = strategist or AllocationStrategist()
        self.comparator = comparator or ScenarioComparator(engine=self.engine)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "PlanningService":
        """Build a service configured by *settings*."""
        engine = ProjectionEngine()
        return cls(
            engine=engine,
            strategist=AllocationStrategist(default_age=settings.default_strategy_age),
            comparator=ScenarioComparator(
                engine=engine,
                contribution_ratio=settings.contribution_increase_ratio,
                retirement_shift=settings.retirement_age_shift,
            ),
        )

    # -------------------- Single calculations --------------------

    def retirement_plan(
        self,
        request: RetirementPlanRequest,
        use_defaults: bool = False,
    ) -> RetirementPlan:
        """Project a retirement plan request."""
        if use_defaults:
            request = apply_defaults(request)
        return self.engine.project(request.to_plan())

    def social_security(
        self,
        request: SocialSecurityRequest,
        use_defaults: bool = False,
        as_of: Optional[date] = None,
    ) -> SocialSecurityProfile:
        """Estimate Social Security benefits for a request."""
        if use_defaults:
            request = apply_defaults(request)
        return self.estimator.estimate(request.to_profile(), as_of=as_of)

    def investment_strategy(
        self,
        request: AllocationRequest,
        use_defaults: bool = False,
    ) -> InvestmentStrategy:
        """Banded strategy, or a validated custom split when one is given."""
        if use_defaults:
            request = apply_defaults(request)
        value = request.require_portfolio_value()
        if request.is_custom:
            return self.strategist.custom(
                request.user_id,
                value,
                request.stocks_percent,
                request.bonds_percent,
                request.cash_percent,
                age=request.age,
            )
        return self.strategist.generate(request.user_id, request.age, value)

    def scenarios(
        self,
        request: RetirementPlanRequest,
        use_defaults: bool = False,
        increased_contribution: Optional[Decimal] = None,
    ) -> ScenarioSet:
        """What-if comparison for a retirement plan request."""
        if use_defaults:
            request = apply_defaults(request)
        return self.comparator.compare(
            request.to_plan(), increased_contribution=increased_contribution
        )

    # -------------------- Combined --------------------

    def dashboard(
        self,
        plan_request: RetirementPlanRequest,
        benefit_request: SocialSecurityRequest,
        allocation_request: AllocationRequest,
        use_defaults: bool = False,
        as_of: Optional[date] = None,
    ) -> PlanningDashboard:
        """
        Compute plan, benefits and strategy together.

        When the allocation request has no age, the plan's current age is
        used so that all three views describe the same person.
        """
        plan = self.retirement_plan(plan_request, use_defaults=use_defaults)
        benefits = self.social_security(benefit_request, use_defaults=use_defaults, as_of=as_of)
        if allocation_request.age is None:
            allocation_request = allocation_request.model_copy(
                update={"age": plan.current_age}
            )
        strategy = self.investment_strategy(allocation_request, use_defaults=use_defaults)

        logger.debug(
            "dashboard_built",
            user_id=plan.user_id,
            status=plan.status.value,
            risk_band=strategy.risk_band.value,
        )
        return PlanningDashboard(
            retirement_plan=plan,
            social_security=benefits,
            investment_strategy=strategy,
        )
