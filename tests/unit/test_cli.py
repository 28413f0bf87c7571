"""
Unit tests for CLI module.

Tests command-line interface functionality using Click's testing utilities.
"""

import json

import pytest
from click.testing import CliRunner

from retireplan.cli import main, __version__


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def runner(monkeypatch):
    """Create CLI test runner with a clean environment."""
    for name in ("DEBUG", "LOG_LEVEL", "LOG_JSON", "USE_DEFAULTS"):
        monkeypatch.delenv(f"RETIREPLAN_{name}", raising=False)
    return CliRunner()


@pytest.fixture
def plan_file(tmp_path):
    """Create a sparse retirement plan request file."""
    data = {
        "schema_version": "1.0.0",
        "kind": "retirement_plan",
        "currentAge": 42,
        "retirementAge": 65,
        "currentSavings": "106965.67",
        "monthlyContribution": "650",
        "employerMatch": "325",
        "expectedAnnualReturnRatePercent": "7.0",
        "desiredMonthlyIncome": "6200",
    }
    path = tmp_path / "plan.json"
    with open(path, "w") as f:
        json.dump(data, f)
    return path


PLAN_ARGS = [
    "--current-age", "42",
    "--retirement-age", "65",
    "--savings", "106965.67",
    "--contribution", "650",
    "--employer-match", "325",
    "--return-rate", "7.0",
    "--desired-income", "6200",
]


# ============================================================================
# MAIN COMMAND TESTS
# ============================================================================

class TestMainCommand:
    """Test main CLI entry point."""

    def test_main_help(self, runner):
        """Test main --help shows help message."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "RetirePlan" in result.output
        for command in ("project", "benefits", "allocate", "compare", "dashboard", "config"):
            assert command in result.output

    def test_main_version(self, runner):
        """Test main --version shows version."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_main_quiet_option(self, runner):
        """Test --quiet option is accepted."""
        result = runner.invoke(main, ["--quiet", "--help"])
        assert result.exit_code == 0


# ============================================================================
# PROJECT COMMAND TESTS
# ============================================================================

class TestProjectCommand:
    """Test project command."""

    def test_project_help(self, runner):
        result = runner.invoke(main, ["project", "--help"])
        assert result.exit_code == 0
        assert "--current-age" in result.output
        assert "--use-defaults" in result.output

    def test_project_json(self, runner):
        result = runner.invoke(main, ["project", *PLAN_ARGS, "--json"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["years_to_retirement"] == 23
        assert data["status"] == "behind"
        assert data["current_savings"] == "106965.67"

    def test_project_table(self, runner):
        result = runner.invoke(main, ["project", *PLAN_ARGS])
        assert result.exit_code == 0, result.output
        assert "Retirement Projection" in result.output
        assert "Behind" in result.output
        assert "Consider increasing" in result.output

    def test_project_quiet_hides_recommendation(self, runner):
        result = runner.invoke(main, ["--quiet", "project", *PLAN_ARGS])
        assert result.exit_code == 0
        assert "Consider increasing" not in result.output

    def test_project_schedule(self, runner):
        result = runner.invoke(main, ["project", *PLAN_ARGS, "--schedule"])
        assert result.exit_code == 0
        assert "Balance Schedule" in result.output

    def test_project_requires_ages(self, runner):
        result = runner.invoke(main, ["project"])
        assert result.exit_code == 1
        assert "--current-age" in result.output

    def test_project_missing_values_without_defaults(self, runner):
        result = runner.invoke(main, [
            "project", "--current-age", "42", "--retirement-age", "65", "--no-defaults",
        ])
        assert result.exit_code == 1
        assert "missing required values" in result.output

    def test_project_with_defaults(self, runner):
        sparse = runner.invoke(main, [
            "project", "--current-age", "42", "--retirement-age", "65",
            "--use-defaults", "--json",
        ])
        full = runner.invoke(main, ["project", *PLAN_ARGS, "--json"])
        assert sparse.exit_code == 0, sparse.output
        assert json.loads(sparse.output)["projected_balance"] == \
            json.loads(full.output)["projected_balance"]

    def test_project_use_defaults_from_env(self, runner, monkeypatch):
        monkeypatch.setenv("RETIREPLAN_USE_DEFAULTS", "true")
        result = runner.invoke(main, [
            "project", "--current-age", "42", "--retirement-age", "65", "--json",
        ])
        assert result.exit_code == 0, result.output

    def test_project_invalid_ages(self, runner):
        result = runner.invoke(main, [
            "project", "--current-age", "65", "--retirement-age", "60", "--use-defaults",
        ])
        assert result.exit_code == 1
        assert "retirement_age" in result.output

    def test_project_invalid_amount(self, runner):
        result = runner.invoke(main, [
            "project", "--current-age", "42", "--retirement-age", "65", "--savings", "lots",
        ])
        assert result.exit_code != 0
        assert "not a valid number" in result.output

    def test_project_from_file(self, runner, plan_file):
        result = runner.invoke(main, ["project", "--file", str(plan_file), "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["years_to_retirement"] == 23

    def test_project_file_with_override(self, runner, plan_file):
        result = runner.invoke(main, [
            "project", "--file", str(plan_file), "--retirement-age", "67", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["years_to_retirement"] == 25

    def test_project_output(self, runner, tmp_path):
        output = tmp_path / "result.json"
        result = runner.invoke(main, ["project", *PLAN_ARGS, "--output", str(output)])
        assert result.exit_code == 0, result.output
        assert "Result saved" in result.output

        with open(output) as f:
            payload = json.load(f)
        assert payload["result"]["status"] == "behind"

    def test_project_plot(self, runner, tmp_path):
        chart = tmp_path / "balance.png"
        result = runner.invoke(main, ["--quiet", "project", *PLAN_ARGS, "--plot", str(chart)])
        assert result.exit_code == 0, result.output
        assert chart.exists()


# ============================================================================
# BENEFITS / ALLOCATE TESTS
# ============================================================================

class TestBenefitsCommand:
    """Test benefits command."""

    def test_benefits_json(self, runner):
        result = runner.invoke(main, [
            "benefits", "--salary", "78000", "--dob", "1983-05-15",
            "--as-of", "2025-01-01", "--json",
        ])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["benefit_at_62"] == "1950.00"
        assert data["benefit_at_67"] == "2600.00"
        assert data["benefit_at_70"] == "3432.00"
        assert data["current_age"] == 42

    def test_benefits_table(self, runner):
        result = runner.invoke(main, ["benefits", "--salary", "78000"])
        assert result.exit_code == 0, result.output
        assert "$2,600.00" in result.output

    def test_benefits_requires_salary(self, runner):
        result = runner.invoke(main, ["benefits", "--no-defaults"])
        assert result.exit_code == 1
        assert "current_annual_salary" in result.output


class TestAllocateCommand:
    """Test allocate command."""

    def test_allocate_json(self, runner):
        result = runner.invoke(main, [
            "allocate", "--age", "25", "--portfolio-value", "106965", "--json",
        ])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["risk_band"] == "aggressive"
        assert data["stocks_amount"] == "85572.00"

    def test_allocate_table(self, runner):
        result = runner.invoke(main, ["allocate", "--age", "60", "--portfolio-value", "1000"])
        assert result.exit_code == 0, result.output
        assert "Conservative" in result.output
        assert "Rebalance portfolio quarterly" in result.output

    def test_allocate_custom(self, runner):
        result = runner.invoke(main, [
            "allocate", "--portfolio-value", "1000",
            "--stocks", "70", "--bonds", "20", "--cash", "10", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["stocks_amount"] == "700.00"

    def test_allocate_bad_sum(self, runner):
        result = runner.invoke(main, [
            "allocate", "--portfolio-value", "1000",
            "--stocks", "70", "--bonds", "20", "--cash", "5",
        ])
        assert result.exit_code == 1
        assert "must sum to 100%" in result.output

    def test_allocate_partial_split(self, runner):
        result = runner.invoke(main, ["allocate", "--portfolio-value", "1000", "--stocks", "70"])
        assert result.exit_code == 1
        assert "Error" in result.output


# ============================================================================
# COMPARE / DASHBOARD TESTS
# ============================================================================

class TestCompareCommand:
    """Test compare command."""

    def test_compare_json(self, runner):
        result = runner.invoke(main, ["compare", *PLAN_ARGS, "--json"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert list(data) == ["current", "scenarioA", "scenarioB", "scenarioC"]
        assert data["scenarioA"]["plan"]["monthly_contribution"] == "780.00"

    def test_compare_override(self, runner):
        result = runner.invoke(main, [
            "compare", *PLAN_ARGS, "--increased-contribution", "1000", "--json",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["scenarioA"]["plan"]["monthly_contribution"] == "1000.00"

    def test_compare_table(self, runner):
        result = runner.invoke(main, ["compare", *PLAN_ARGS])
        assert result.exit_code == 0, result.output
        assert "What-If Scenarios" in result.output

    def test_compare_too_close_to_retirement(self, runner):
        result = runner.invoke(main, [
            "compare", "--current-age", "64", "--retirement-age", "65", "--use-defaults",
        ])
        assert result.exit_code == 1
        assert "early-retirement" in result.output


class TestDashboardCommand:
    """Test dashboard command."""

    def test_dashboard_json(self, runner):
        result = runner.invoke(main, [
            "dashboard", "--current-age", "42", "--retirement-age", "65",
            "--use-defaults", "--as-of", "2025-01-01", "--json",
        ])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        assert data["summary"]["overall_status"] == "behind"
        assert data["summary"]["social_security_benefit"] == "$2,600.00"
        assert data["investment_strategy"]["risk_band"] == "moderate"

    def test_dashboard_panel(self, runner):
        result = runner.invoke(main, [
            "dashboard", "--current-age", "42", "--retirement-age", "65", "--use-defaults",
        ])
        assert result.exit_code == 0, result.output
        assert "Planning Dashboard" in result.output


# ============================================================================
# CONFIG COMMAND TESTS
# ============================================================================

class TestConfigCommand:
    """Test config subcommands."""

    def test_config_help(self, runner):
        result = runner.invoke(main, ["config", "--help"])
        assert result.exit_code == 0
        assert "create" in result.output
        assert "validate" in result.output

    @pytest.mark.parametrize("kind", ["retirement_plan", "social_security", "allocation"])
    def test_create_then_validate(self, runner, tmp_path, kind):
        path = tmp_path / f"{kind}.json"
        created = runner.invoke(main, ["config", "create", str(path), "--kind", kind])
        assert created.exit_code == 0, created.output
        assert path.exists()

        validated = runner.invoke(main, ["config", "validate", str(path)])
        assert validated.exit_code == 0, validated.output
        assert f"Request is valid ({kind})" in validated.output

    def test_template_runs(self, runner, tmp_path):
        path = tmp_path / "plan.json"
        runner.invoke(main, ["config", "create", str(path)])

        result = runner.invoke(main, ["project", "--file", str(path), "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["expected_annual_inflation_rate_percent"] == "2.5"

    def test_validate_invalid(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"kind": "pension"}))

        result = runner.invoke(main, ["config", "validate", str(path)])
        assert result.exit_code == 1
        assert "Unknown request kind" in result.output

    def test_wrong_kind_for_command(self, runner, tmp_path):
        path = tmp_path / "alloc.json"
        runner.invoke(main, ["config", "create", str(path), "--kind", "allocation"])

        result = runner.invoke(main, ["project", "--file", str(path)])
        assert result.exit_code == 1
        assert "expected RetirementPlanRequest" in result.output

    def test_validate_non_utf8(self, runner, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"kind": "allocation", "note": "\xe9t\xe9"}')

        result = runner.invoke(main, ["config", "validate", str(path)])
        assert result.exit_code == 1
        assert "not UTF-8" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)
