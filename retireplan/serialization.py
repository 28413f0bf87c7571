"""
Serialization module for RetirePlan.

Purpose
-------
Converts computed results into JSON-ready dictionaries and loads caller
requests from JSON documents.

Supports serialization of:
- RetirementPlan (inputs + projection)
- SocialSecurityProfile (inputs + benefits)
- InvestmentStrategy
- ScenarioSet
- PlanningDashboard

Conventions
-----------
- Currency values are strings with exactly two decimals ("2600.00") so
  that no precision is lost in JSON.
- Enumerations are written by value ("on_track", "aggressive").
- Saved documents carry ``schema_version``.

Example
-------
>>> from retireplan.serialization import load_request, plan_to_dict
>>> request = load_request(Path("plan.json"))
>>> plan = ProjectionEngine().project(request.to_plan())
>>> plan_to_dict(plan)["status"]
'behind'
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .config import AllocationRequest, Request, RetirementPlanRequest, SocialSecurityRequest
from .exceptions import ConfigurationError, InvalidInputError
from .utils import round_currency

if TYPE_CHECKING:
    from .allocation import InvestmentStrategy
    from .benefits import SocialSecurityProfile
    from .planner import PlanningDashboard
    from .projection import RetirementPlan
    from .scenario import ScenarioSet
    from .types import BenefitResultDict, PlanResultDict, ScenarioDict, StrategyResultDict

__all__ = [
    "SCHEMA_VERSION",
    "plan_to_dict",
    "profile_to_dict",
    "strategy_to_dict",
    "scenarios_to_dict",
    "dashboard_to_dict",
    "to_dict",
    "parse_request",
    "load_request",
    "save_result",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "1.0.0"

_REQUEST_KINDS = {
    "retirement_plan": RetirementPlanRequest,
    "social_security": SocialSecurityRequest,
    "allocation": AllocationRequest,
}


def _money(value: Optional[Decimal]) -> Optional[str]:
    if value is None:
        return None
    return str(round_currency(value))


def _plain(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


# ---------------------------------------------------------------------------
# Result serialization
# ---------------------------------------------------------------------------

def plan_to_dict(plan: RetirementPlan) -> PlanResultDict:
    """
    Convert a RetirementPlan to a dictionary.

    Parameters
    ----------
    plan : RetirementPlan
        Projected or unprojected plan. Computed fields of an unprojected
        plan are None.
    """
    return {
        "user_id": plan.user_id,
        "current_age": plan.current_age,
        "retirement_age": plan.retirement_age,
        "expected_retirement_duration_years": plan.expected_retirement_duration_years,
        "current_savings": _money(plan.current_savings),
        "monthly_contribution": _money(plan.monthly_contribution),
        "employer_match": _money(plan.employer_match),
        "desired_monthly_income": _money(plan.desired_monthly_income),
        "expected_annual_return_rate_percent": _plain(plan.expected_annual_return_rate_percent),
        "expected_annual_inflation_rate_percent": _plain(plan.expected_annual_inflation_rate_percent),
        "years_to_retirement": plan.years_to_retirement,
        "projected_balance": _money(plan.projected_balance),
        "projected_monthly_income": _money(plan.projected_monthly_income),
        "inflation_adjusted_monthly_income": _money(plan.inflation_adjusted_monthly_income),
        "status": plan.status.value if plan.status is not None else None,
        "recommendation_text": plan.recommendation_text,
    }


def profile_to_dict(profile: SocialSecurityProfile) -> BenefitResultDict:
    """Convert a SocialSecurityProfile to a dictionary."""
    return {
        "user_id": profile.user_id,
        "date_of_birth": profile.date_of_birth.isoformat() if profile.date_of_birth else None,
        "current_annual_salary": _money(profile.current_annual_salary),
        "years_of_work_history": profile.years_of_work_history,
        "current_age": profile.current_age,
        "benefit_at_62": _money(profile.benefit_at_62),
        "benefit_at_67": _money(profile.benefit_at_67),
        "benefit_at_70": _money(profile.benefit_at_70),
        "full_retirement_age": profile.full_retirement_age,
        "recommendation_text": profile.recommendation_text,
    }


def strategy_to_dict(strategy: InvestmentStrategy) -> StrategyResultDict:
    """Convert an InvestmentStrategy to a dictionary."""
    return {
        "user_id": strategy.user_id,
        "age": strategy.age,
        "portfolio_value": _money(strategy.portfolio_value),
        "risk_band": strategy.risk_band.value,
        "strategy_name": strategy.strategy_name,
        "risk_level": strategy.risk_level,
        "stocks_percent": strategy.stocks_percent,
        "bonds_percent": strategy.bonds_percent,
        "cash_percent": strategy.cash_percent,
        "stocks_amount": _money(strategy.stocks_amount),
        "bonds_amount": _money(strategy.bonds_amount),
        "cash_amount": _money(strategy.cash_amount),
        "recommendation_text": strategy.recommendation_text,
        "recommendations": list(strategy.recommendations),
    }


def scenarios_to_dict(scenarios: ScenarioSet) -> Dict[str, ScenarioDict]:
    """Convert a ScenarioSet to ``{label: {"description", "plan"}}``."""
    return {
        label: {"description": s.description, "plan": plan_to_dict(s.plan)}
        for label, s in scenarios.items()
    }


def dashboard_to_dict(dashboard: PlanningDashboard) -> Dict[str, Any]:
    """Convert a PlanningDashboard to a dictionary."""
    return {
        "retirement_plan": plan_to_dict(dashboard.retirement_plan),
        "social_security": profile_to_dict(dashboard.social_security),
        "investment_strategy": strategy_to_dict(dashboard.investment_strategy),
        "summary": dict(dashboard.summary),
    }


def to_dict(result: Any) -> Dict[str, Any]:
    """
    Serialize any RetirePlan result, dispatching on its type.

    Raises
    ------
    TypeError
        If *result* is not a known result type.
    """
    from .allocation import InvestmentStrategy
    from .benefits import SocialSecurityProfile
    from .planner import PlanningDashboard
    from .projection import RetirementPlan
    from .scenario import ScenarioSet

    if isinstance(result, RetirementPlan):
        return plan_to_dict(result)
    if isinstance(result, SocialSecurityProfile):
        return profile_to_dict(result)
    if isinstance(result, InvestmentStrategy):
        return strategy_to_dict(result)
    if isinstance(result, ScenarioSet):
        return scenarios_to_dict(result)
    if isinstance(result, PlanningDashboard):
        return dashboard_to_dict(result)
    raise TypeError(f"Cannot serialize {type(result).__name__}")


# ---------------------------------------------------------------------------
# Request loading
# ---------------------------------------------------------------------------

def parse_request(data: Dict[str, Any]) -> Request:
    """
    Build a request model from a dictionary.

    The ``kind`` key selects the model ("retirement_plan",
    "social_security", "allocation"); ``schema_version``, if present,
    must match the major version of SCHEMA_VERSION.

    Raises
    ------
    ConfigurationError
        Unknown kind or incompatible schema version.
    InvalidInputError
        Field values fail validation.
    """
    data = dict(data)
    version = data.pop("schema_version", None)
    if version is not None and str(version).split(".")[0] != SCHEMA_VERSION.split(".")[0]:
        raise ConfigurationError(
            f"Unsupported schema_version {version!r} (expected {SCHEMA_VERSION})."
        )

    kind = data.get("kind", "retirement_plan")
    model = _REQUEST_KINDS.get(kind)
    if model is None:
        raise ConfigurationError(
            f"Unknown request kind {kind!r}. Valid: {', '.join(_REQUEST_KINDS)}"
        )

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidInputError(f"Invalid {kind} request: {e}") from e


def load_request(path: Union[str, Path]) -> Request:
    """
    Load a request from a JSON file.

    Parameters
    ----------
    path : str or Path
        JSON document with a ``kind`` key (defaults to retirement_plan).
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path} is not valid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"{path} is not UTF-8 text: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a JSON object")
    return parse_request(data)


def save_result(result: Any, path: Union[str, Path]) -> None:
    """
    Save a result as JSON with a schema version.

    Parameters
    ----------
    result : RetirementPlan | SocialSecurityProfile | InvestmentStrategy | ScenarioSet | PlanningDashboard
    path : str or Path
        Destination; parent directories are created.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"schema_version": SCHEMA_VERSION, "result": to_dict(result)}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
