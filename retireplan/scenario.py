"""
What-if scenario comparison for RetirePlan

Purpose
-------
Runs the retirement projection under a fixed set of input variants and
returns them side by side:

- current   : the baseline as given
- scenarioA : monthly contribution increased (×1.2 by default)
- scenarioB : retire two years earlier
- scenarioC : retire two years later

Each variant is projected independently. No best-scenario selection is
made; ranking is left to the caller.

Typical usage
-------------
>>> comparator = ScenarioComparator()
>>> scenarios = comparator.compare(plan)
>>> scenarios["scenarioB"].plan.retirement_age
63
>>> scenarios.to_frame()[["retirement_age", "projected_balance"]]
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterator, Mapping, Optional

import pandas as pd

from .constants import CONTRIBUTION_INCREASE_RATIO, RETIREMENT_AGE_SHIFT_YEARS
from .exceptions import InvalidInputError
from .logging import get_logger
from .projection import ProjectionEngine, RetirementPlan
from .utils import Number, money_context, round_currency, to_decimal

__all__ = [
    "Scenario",
    "ScenarioSet",
    "ScenarioComparator",
    "SCENARIO_LABELS",
]

logger = get_logger(__name__)

SCENARIO_LABELS = ("current", "scenarioA", "scenarioB", "scenarioC")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Scenario:
    label: str
    description: str
    plan: RetirementPlan


class ScenarioSet(Mapping[str, Scenario]):
    """Read-only label → Scenario mapping, in insertion order."""

    def __init__(self, scenarios: Mapping[str, Scenario]):
        self._scenarios: Dict[str, Scenario] = dict(scenarios)

    def __getitem__(self, label: str) -> Scenario:
        return self._scenarios[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._scenarios)

    def __len__(self) -> int:
        return len(self._scenarios)

    def __repr__(self) -> str:
        return f"ScenarioSet({list(self._scenarios)})"

    @property
    def plans(self) -> Dict[str, RetirementPlan]:
        return {label: s.plan for label, s in self._scenarios.items()}

    def to_frame(self) -> pd.DataFrame:
        """
        Summary table with one row per scenario.

        Currency columns are floats for display and plotting; the
        authoritative Decimal values remain on each ``plan``.
        """
        rows = []
        for label, scenario in self._scenarios.items():
            plan = scenario.plan
            rows.append(
                {
                    "scenario": label,
                    "description": scenario.description,
                    "retirement_age": plan.retirement_age,
                    "years_to_retirement": plan.years_to_retirement,
                    "monthly_contribution": float(plan.monthly_contribution),
                    "projected_balance": float(plan.projected_balance),
                    "projected_monthly_income": float(plan.projected_monthly_income),
                    "status": plan.status.value,
                }
            )
        if not rows:
            return pd.DataFrame(columns=[
                "description", "retirement_age", "years_to_retirement",
                "monthly_contribution", "projected_balance",
                "projected_monthly_income", "status",
            ])
        return pd.DataFrame(rows).set_index("scenario")


# ---------------------------------------------------------------------------
# Comparator
# ---------------------------------------------------------------------------

class ScenarioComparator:
    """
    Builds and projects the what-if variants of a baseline plan.

    Parameters
    ----------
    engine : ProjectionEngine, optional
        Projection used for every variant. A default engine is created
        when omitted.
    contribution_ratio : Decimal, default 1.2
        Multiplier for scenario A's contribution.
    retirement_shift : int, default 2
        Years subtracted/added to the retirement age in scenarios B/C.
    """

    def __init__(
        self,
        engine: Optional[ProjectionEngine] = None,
        contribution_ratio: Number = CONTRIBUTION_INCREASE_RATIO,
        retirement_shift: int = RETIREMENT_AGE_SHIFT_YEARS,
    ):
        ratio = to_decimal(contribution_ratio, name="contribution_ratio")
        if ratio <= 0:
            raise InvalidInputError(f"contribution_ratio must be positive (got {ratio}).")
        if isinstance(retirement_shift, bool) or not isinstance(retirement_shift, int) or retirement_shift <= 0:
            raise InvalidInputError(
                f"retirement_shift must be a positive integer (got {retirement_shift!r})."
            )
        self.engine = engine or ProjectionEngine()
        self.contribution_ratio = ratio
        self.retirement_shift = retirement_shift

    def __repr__(self) -> str:
        return (
            f"ScenarioComparator(contribution_ratio={self.contribution_ratio}, "
            f"retirement_shift={self.retirement_shift})"
        )

    def increased_contribution(self, plan: RetirementPlan) -> Decimal:
        with money_context():
            return round_currency(plan.monthly_contribution * self.contribution_ratio)

    def compare(
        self,
        baseline: RetirementPlan,
        increased_contribution: Optional[Number] = None,
    ) -> ScenarioSet:
        """
        Project the baseline and its three variants.

        Parameters
        ----------
        baseline : RetirementPlan
            Plan to vary. Computed fields, if present, are ignored.
        increased_contribution : Decimal, optional
            Absolute monthly contribution for scenario A. When omitted the
            baseline contribution times ``contribution_ratio`` is used.

        Raises
        ------
        InvalidInputError
            If retiring ``retirement_shift`` years earlier would not leave
            retirement_age above current_age.
        """
        if increased_contribution is None:
            contribution = self.increased_contribution(baseline)
            percent = (self.contribution_ratio - 1) * 100
            contribution_text = f"Increase contributions by {percent.normalize():f}%"
        else:
            contribution = to_decimal(increased_contribution, name="increased_contribution")
            contribution_text = f"Increase contributions to {contribution}"

        earlier = baseline.retirement_age - self.retirement_shift
        later = baseline.retirement_age + self.retirement_shift
        if earlier <= baseline.current_age:
            raise InvalidInputError(
                f"Cannot build early-retirement scenario: retirement_age {earlier} "
                f"would not exceed current_age {baseline.current_age}."
            )

        variants = {
            "current": ("Current plan", baseline.with_inputs()),
            "scenarioA": (
                contribution_text,
                baseline.with_inputs(monthly_contribution=contribution),
            ),
            "scenarioB": (f"Retire at age {earlier}", baseline.with_inputs(retirement_age=earlier)),
            "scenarioC": (f"Retire at age {later}", baseline.with_inputs(retirement_age=later)),
        }

        scenarios = {
            label: Scenario(label=label, description=description, plan=self.engine.project(plan))
            for label, (description, plan) in variants.items()
        }
        logger.debug(
            "scenarios_compared",
            user_id=baseline.user_id,
            labels=list(scenarios),
        )
        return ScenarioSet(scenarios)
