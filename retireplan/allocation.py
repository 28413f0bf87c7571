"""
Age-banded investment allocation for RetirePlan.

Purpose
-------
Maps an age to a stock/bond/cash allocation profile (risk band) and
converts the percentages into dollar amounts against a portfolio value.

Band table (half-open on age)
-----------------------------
    age < 35          AGGRESSIVE     80 / 15 /  5
    35 <= age < 55    MODERATE       65 / 30 /  5
    age >= 55         CONSERVATIVE   40 / 50 / 10

Band percentages are checked once, when this module is imported, so a
band-derived strategy always sums to 100. User-supplied percentages go
through ``AllocationStrategist.custom``, which always runs
``validate_allocation``.

Example
-------
>>> strategy = AllocationStrategist().generate(
...     user_id=1, age=25, portfolio_value=Decimal("106965")
... )
>>> strategy.risk_band
<RiskBand.AGGRESSIVE: 'aggressive'>
>>> strategy.stocks_amount
Decimal('85572.00')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, NamedTuple, Optional, Tuple

from .constants import (
    ALLOCATION_TOTAL_PERCENT,
    DEFAULT_STRATEGY_AGE,
    SUGGESTED_ALLOCATION_ACTIONS,
)
from .exceptions import AllocationConstraintError
from .logging import get_logger
from .types import RiskBand
from .utils import (
    Number,
    check_non_negative,
    check_positive_int,
    money_context,
    round_currency,
    to_decimal,
)

__all__ = [
    "BandAllocation",
    "BAND_ALLOCATIONS",
    "InvestmentStrategy",
    "AllocationStrategist",
    "is_valid_allocation",
    "validate_allocation",
]

logger = get_logger(__name__)


class BandAllocation(NamedTuple):
    stocks: int
    bonds: int
    cash: int

    @property
    def total(self) -> int:
        return self.stocks + self.bonds + self.cash


BAND_ALLOCATIONS: Dict[RiskBand, BandAllocation] = {
    RiskBand.AGGRESSIVE: BandAllocation(stocks=80, bonds=15, cash=5),
    RiskBand.MODERATE: BandAllocation(stocks=65, bonds=30, cash=5),
    RiskBand.CONSERVATIVE: BandAllocation(stocks=40, bonds=50, cash=10),
}

_BAND_RECOMMENDATIONS: Dict[RiskBand, str] = {
    RiskBand.AGGRESSIVE: (
        "At your age, you can afford to take more risk for potentially higher returns. "
        "Consider maintaining a higher stock allocation."
    ),
    RiskBand.MODERATE: (
        "Your moderate allocation balances growth potential with risk management. "
        "Consider gradually reducing stock allocation as you approach retirement."
    ),
    RiskBand.CONSERVATIVE: (
        "As you near retirement, focus on capital preservation. "
        "Consider increasing bond allocation for stability."
    ),
}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_allocation(stocks: int, bonds: int, cash: int) -> None:
    """
    Raise AllocationConstraintError unless the percentages form a valid split.

    Each percentage must be a non-negative integer and the three must sum
    to exactly 100.
    """
    for name, value in (("stocks", stocks), ("bonds", bonds), ("cash", cash)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise AllocationConstraintError(
                f"{name} percentage must be an integer (got {value!r})"
            )
        if value < 0:
            raise AllocationConstraintError(
                f"{name} percentage must be non-negative (got {value}%)"
            )
    total = stocks + bonds + cash
    if total != ALLOCATION_TOTAL_PERCENT:
        raise AllocationConstraintError(
            f"Asset allocation percentages must sum to 100% (currently {total}%)"
        )


def is_valid_allocation(strategy: "InvestmentStrategy") -> bool:
    """Return True if *strategy*'s percentages are a valid split."""
    try:
        validate_allocation(
            strategy.stocks_percent, strategy.bonds_percent, strategy.cash_percent
        )
    except AllocationConstraintError:
        return False
    return True


for _band, _split in BAND_ALLOCATIONS.items():
    validate_allocation(*_split)


# ---------------------------------------------------------------------------
# Investment Strategy
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvestmentStrategy:
    """
    Stock/bond/cash allocation with dollar amounts.

    Instances are produced by AllocationStrategist; construct directly only
    for externally supplied allocations and check them with
    ``is_valid_allocation``.
    """
    portfolio_value: Decimal
    age: int
    risk_band: RiskBand
    stocks_percent: int
    bonds_percent: int
    cash_percent: int
    stocks_amount: Decimal
    bonds_amount: Decimal
    cash_amount: Decimal
    recommendation_text: str
    recommendations: Tuple[str, ...] = field(default=SUGGESTED_ALLOCATION_ACTIONS)
    user_id: Optional[int] = None

    @property
    def strategy_name(self) -> str:
        return self.risk_band.strategy_name

    @property
    def risk_level(self) -> str:
        return self.risk_band.risk_level

    @property
    def total_percent(self) -> int:
        return self.stocks_percent + self.bonds_percent + self.cash_percent


# ---------------------------------------------------------------------------
# Strategist
# ---------------------------------------------------------------------------

class AllocationStrategist:
    """
    Stateless age-banded allocation generator.

    Parameters
    ----------
    default_age : int, default 42
        Age assumed when none is supplied.
    """

    def __init__(self, default_age: int = DEFAULT_STRATEGY_AGE):
        check_positive_int("default_age", default_age)
        self.default_age = default_age

    def __repr__(self) -> str:
        return f"AllocationStrategist(default_age={self.default_age})"

    def band_for_age(self, age: int) -> RiskBand:
        return RiskBand.for_age(age)

    def generate(
        self,
        user_id: Optional[int],
        age: Optional[int],
        portfolio_value: Number,
    ) -> InvestmentStrategy:
        """
        Build the banded strategy for *age*.

        Parameters
        ----------
        user_id : int, optional
            Caller-side identifier, carried through.
        age : int, optional
            Investor age. None selects ``default_age`` (the Moderate band
            with the stock default); this is a documented default, not an
            error.
        portfolio_value : Decimal
            Current portfolio value (>= 0).
        """
        if age is None:
            logger.info("default_strategy_age_used", user_id=user_id, age=self.default_age)
            age = self.default_age
        check_positive_int("age", age)

        band = self.band_for_age(age)
        split = BAND_ALLOCATIONS[band]
        return self._build(user_id, age, band, split, portfolio_value)

    def custom(
        self,
        user_id: Optional[int],
        portfolio_value: Number,
        stocks: int,
        bonds: int,
        cash: int,
        age: Optional[int] = None,
    ) -> InvestmentStrategy:
        """
        Build a strategy from user-supplied percentages.

        The split is validated before anything is computed. The risk band
        and recommendation still follow *age* (or ``default_age``).

        Raises
        ------
        AllocationConstraintError
            If the percentages are negative or do not sum to 100.
        """
        validate_allocation(stocks, bonds, cash)
        age = self.default_age if age is None else age
        check_positive_int("age", age)
        band = self.band_for_age(age)
        return self._build(user_id, age, band, BandAllocation(stocks, bonds, cash), portfolio_value)

    def _build(
        self,
        user_id: Optional[int],
        age: int,
        band: RiskBand,
        split: BandAllocation,
        portfolio_value: Number,
    ) -> InvestmentStrategy:
        value = to_decimal(portfolio_value, name="portfolio_value")
        check_non_negative("portfolio_value", value)

        with money_context():
            stocks_amount = round_currency(value * split.stocks / 100)
            bonds_amount = round_currency(value * split.bonds / 100)
            cash_amount = round_currency(value * split.cash / 100)

        logger.debug(
            "allocation_generated",
            user_id=user_id,
            age=age,
            risk_band=band.value,
            split=tuple(split),
        )

        return InvestmentStrategy(
            user_id=user_id,
            portfolio_value=value,
            age=age,
            risk_band=band,
            stocks_percent=split.stocks,
            bonds_percent=split.bonds,
            cash_percent=split.cash,
            stocks_amount=stocks_amount,
            bonds_amount=bonds_amount,
            cash_amount=cash_amount,
            recommendation_text=_BAND_RECOMMENDATIONS[band],
        )
