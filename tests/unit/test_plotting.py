"""
Unit tests for plotting.py module.

Tests plot_balance_schedule and plot_scenarios figure construction and
file output.
"""

import pytest

# Use non-interactive backend for testing
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from retireplan.plotting import plot_balance_schedule, plot_scenarios
from retireplan.scenario import ScenarioSet


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestPlotBalanceSchedule:
    """Test plot_balance_schedule."""

    def test_returns_fig_ax(self, sample_plan):
        fig, ax = plot_balance_schedule(sample_plan, return_fig_ax=True)

        assert fig is not None
        assert "42" in ax.get_title() and "65" in ax.get_title()
        labels = [line.get_label() for line in ax.get_lines()]
        assert "Balance" in labels
        assert "Target balance" in labels

    def test_returns_none_by_default(self, sample_plan):
        assert plot_balance_schedule(sample_plan) is None

    def test_no_target_for_zero_income(self, sample_plan):
        plan = sample_plan.with_inputs(desired_monthly_income=0)
        _, ax = plot_balance_schedule(plan, return_fig_ax=True, title="No target")

        assert ax.get_title() == "No target"
        labels = [line.get_label() for line in ax.get_lines()]
        assert "Target balance" not in labels

    def test_save(self, sample_plan, tmp_path):
        path = tmp_path / "balance.png"
        plot_balance_schedule(sample_plan, save_path=str(path))
        assert path.exists()
        assert path.stat().st_size > 0


class TestPlotScenarios:
    """Test plot_scenarios."""

    def test_two_panels(self, comparator, sample_plan):
        fig, axes = plot_scenarios(comparator.compare(sample_plan), return_fig_ax=True)

        assert len(axes) == 2
        assert len(axes[0].patches) == 4
        assert len(axes[1].patches) == 4
        assert fig._suptitle.get_text() == "What-If Scenarios"

    def test_save(self, comparator, sample_plan, tmp_path):
        path = tmp_path / "scenarios.png"
        plot_scenarios(comparator.compare(sample_plan), save_path=str(path))
        assert path.exists()

    def test_empty_set_rejected(self):
        with pytest.raises(ValueError, match="at least one scenario"):
            plot_scenarios(ScenarioSet({}))
