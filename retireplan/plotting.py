"""
Plotting utilities for RetirePlan.

Purpose
-------
Charts for projected plans and what-if comparisons:

- plot_balance_schedule: balance growth to retirement, split into
  contributions and investment growth
- plot_scenarios: two-panel comparison of a ScenarioSet (balance and
  monthly income against the desired income)

matplotlib is imported lazily so that the calculators never pay for it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from .constants import MONTHS_PER_YEAR

if TYPE_CHECKING:
    from .projection import ProjectionEngine, RetirementPlan
    from .scenario import ScenarioSet

__all__ = ["plot_balance_schedule", "plot_scenarios"]

DEFAULT_FIGSIZE = (12, 6)
DEFAULT_FIGSIZE_WIDE = (14, 6)


def _thousands(x, pos):
    """Axis formatter: 1_250_000 → '$1,250k'."""
    if x == 0:
        return "0"
    return f"${x / 1e3:,.0f}k"


def plot_balance_schedule(
    plan: RetirementPlan,
    *,
    engine: Optional[ProjectionEngine] = None,
    figsize: tuple = DEFAULT_FIGSIZE,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Stacked area chart of contributions and growth by age.

    Parameters
    ----------
    plan : RetirementPlan
        Plan to chart; need not be projected.
    engine : ProjectionEngine, optional
        Engine providing ``balance_schedule``. A default one is used when
        omitted.
    figsize : tuple, default (12, 6)
    title : str, optional
    save_path : str, optional
        If given, the figure is saved there (PNG at 150 dpi).
    return_fig_ax : bool, default False
        Return ``(fig, ax)`` instead of None.
    """
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter

    from .projection import ProjectionEngine

    engine = engine or ProjectionEngine()
    schedule = engine.balance_schedule(plan)

    fig, ax = plt.subplots(figsize=figsize)
    ages = schedule["age"].to_numpy()
    contributed = schedule["contributions"].to_numpy()
    growth = np.clip(schedule["growth"].to_numpy(), 0, None)

    ax.stackplot(
        ages,
        contributed,
        growth,
        labels=["Savings + contributions", "Investment growth"],
        colors=["#4C72B0", "#55A868"],
        alpha=0.8,
    )
    ax.plot(ages, schedule["balance"].to_numpy(), color="black", linewidth=2.0, label="Balance")

    desired = float(plan.desired_monthly_income)
    if desired > 0:
        # Balance whose 4%-rule income equals the desired income
        target = desired * MONTHS_PER_YEAR / float(engine.withdrawal_rate)
        ax.axhline(target, color="#C44E52", linestyle="--", linewidth=1.5, label="Target balance")

    ax.yaxis.set_major_formatter(FuncFormatter(_thousands))
    ax.set_xlabel("Age", fontsize=11)
    ax.set_ylabel("Balance", fontsize=11)
    ax.set_title(
        title or f"Projected balance, age {plan.current_age} to {plan.retirement_age}",
        fontsize=12,
        fontweight="bold",
    )
    ax.legend(loc="upper left", fontsize=10)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, bbox_inches="tight", dpi=150)

    if return_fig_ax:
        return fig, ax


def plot_scenarios(
    scenarios: ScenarioSet,
    *,
    figsize: tuple = DEFAULT_FIGSIZE_WIDE,
    title: str = "What-If Scenarios",
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Compare scenarios side by side.

    Creates a 2-panel figure:
    - Left: projected balance per scenario
    - Right: projected monthly income per scenario, with the desired income
      of the baseline as a reference line
    """
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter

    if len(scenarios) == 0:
        raise ValueError("plot_scenarios requires at least one scenario")

    frame = scenarios.to_frame()
    labels = [f"{label}\n{desc}" for label, desc in zip(frame.index, frame["description"])]
    colors = plt.cm.Set2(np.linspace(0, 1, len(frame)))
    x = np.arange(len(frame))

    fig, axes = plt.subplots(1, 2, figsize=figsize)

    axes[0].bar(x, frame["projected_balance"], color=colors)
    axes[0].set_title("Projected Balance", fontsize=12, fontweight="bold")
    axes[0].yaxis.set_major_formatter(FuncFormatter(_thousands))

    axes[1].bar(x, frame["projected_monthly_income"], color=colors)
    axes[1].set_title("Projected Monthly Income", fontsize=12, fontweight="bold")
    first = next(iter(scenarios.values())).plan
    axes[1].axhline(
        float(first.desired_monthly_income),
        color="#C44E52",
        linestyle="--",
        linewidth=1.5,
        label="Desired income",
    )
    axes[1].legend(loc="best", fontsize=10)

    for ax in axes:
        ax.set_xticks(x)
        ax.set_xticklabels(labels, fontsize=9)
        ax.grid(True, alpha=0.3, axis="y")

    fig.suptitle(title, fontsize=14, fontweight="bold")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, bbox_inches="tight", dpi=150)

    if return_fig_ax:
        return fig, axes
