"""
RetirePlan — Retirement Planning Calculators

Deterministic calculators for projecting retirement savings, estimating
Social Security benefits, recommending an age-banded investment
allocation and comparing what-if scenarios.

Modules
-------
- projection    : Compound-growth projection and 4%-rule income
- benefits      : Social Security benefit estimate at 62, 67 and 70
- allocation    : Age-banded stock/bond/cash allocation
- scenario      : What-if scenario comparison
- planner       : Request-level service and combined dashboard
- config        : Request models, opt-in defaults, settings
- serialization : JSON results and request loading
- plotting      : Balance and scenario charts
- utils         : Shared utilities (Decimal, validation, formatting)

"""

from .allocation import AllocationStrategist, InvestmentStrategy
from .benefits import BenefitEstimator, SocialSecurityProfile
from .exceptions import (
    AllocationConstraintError,
    ConfigurationError,
    InvalidInputError,
    MissingInputError,
    RetirePlanError,
    ValidationError,
)
from .planner import PlanningDashboard, PlanningService
from .projection import ProjectionEngine, RetirementPlan
from .scenario import Scenario, ScenarioComparator, ScenarioSet
from .types import PlanStatus, RiskBand
from . import utils

__version__ = "1.0.0"
