"""
Command-Line Interface for RetirePlan.

Purpose
-------
Runs the retirement calculators from the shell, either from options or
from a JSON request file, and prints rich tables or JSON.

Commands
--------
- project:   Project a retirement plan to retirement age
- benefits:  Estimate Social Security benefits at 62, 67 and 70
- allocate:  Age-banded (or custom) stock/bond/cash allocation
- compare:   What-if scenarios side by side
- dashboard: Plan, benefits and allocation together
- config:    Create and validate request files

Example Usage
-------------
    # Project from options
    $ retireplan project --current-age 42 --retirement-age 65 \\
        --savings 106965.67 --contribution 650 --employer-match 325 \\
        --return-rate 7 --desired-income 6200

    # Project from a request file, filling gaps with the sample defaults
    $ retireplan project --file plan.json --use-defaults --json

    # Social Security
    $ retireplan benefits --salary 78000 --dob 1983-05-15 --as-of 2025-01-01

    # Show version
    $ retireplan --version
"""

from __future__ import annotations

import functools
import json
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional

import click
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import (
    AllocationRequest,
    AppSettings,
    RetirementPlanRequest,
    SocialSecurityRequest,
)
from .exceptions import ConfigurationError, RetirePlanError
from .logging import configure_logging
from .planner import PlanningService
from .utils import format_currency

__version__ = "1.0.0"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class DecimalParamType(click.ParamType):
    """Parse an option value as an exact Decimal."""

    name = "amount"

    def convert(self, value, param, ctx):
        if isinstance(value, Decimal):
            return value
        try:
            return Decimal(value)
        except InvalidOperation:
            self.fail(f"{value!r} is not a valid number", param, ctx)


AMOUNT = DecimalParamType()


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _handle_errors(func):
    """Turn domain and validation errors into a message and exit code 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (RetirePlanError, PydanticValidationError) as e:
            _fail(str(e))
    return wrapper


def _load(file: Optional[Path], expected: type):
    from .serialization import load_request

    request = load_request(file)
    if not isinstance(request, expected):
        raise ConfigurationError(
            f"{file} holds a {request.kind!r} request, expected {expected.__name__}"
        )
    return request


def _merge(request, overrides: Dict[str, Any]):
    """Apply command-line values on top of a file request."""
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return request
    data = request.model_dump()
    data.update(overrides)
    return type(request).model_validate(data)


def _echo_json(payload: Dict[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2))


def _kv_table(title: str, rows) -> Table:
    table = Table(title=title, show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for key, value in rows:
        table.add_row(key, value)
    return table


def plan_options(func):
    """Options shared by commands that take a retirement plan."""
    options = [
        click.option("--file", "-f", "file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
                     default=None, help="Retirement plan request (JSON)"),
        click.option("--user-id", type=int, default=None, help="Caller-side user id"),
        click.option("--current-age", type=int, default=None, help="Age today"),
        click.option("--retirement-age", type=int, default=None, help="Planned retirement age"),
        click.option("--savings", type=AMOUNT, default=None, help="Current savings"),
        click.option("--contribution", type=AMOUNT, default=None, help="Monthly contribution"),
        click.option("--employer-match", type=AMOUNT, default=None, help="Monthly employer match"),
        click.option("--desired-income", type=AMOUNT, default=None, help="Desired monthly income"),
        click.option("--return-rate", type=AMOUNT, default=None, help="Expected annual return, percent"),
        click.option("--inflation-rate", type=AMOUNT, default=None, help="Expected annual inflation, percent"),
        click.option("--duration", type=int, default=None, help="Years in retirement"),
        click.option("--use-defaults/--no-defaults", default=None,
                     help="Fill absent values from the sample default table"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _plan_request(
    file, user_id, current_age, retirement_age, savings, contribution,
    employer_match, desired_income, return_rate, inflation_rate, duration,
) -> RetirementPlanRequest:
    overrides = {
        "user_id": user_id,
        "current_age": current_age,
        "retirement_age": retirement_age,
        "current_savings": savings,
        "monthly_contribution": contribution,
        "employer_match": employer_match,
        "desired_monthly_income": desired_income,
        "expected_annual_return_rate_percent": return_rate,
        "expected_annual_inflation_rate_percent": inflation_rate,
        "expected_retirement_duration_years": duration,
    }
    if file is not None:
        return _merge(_load(file, RetirementPlanRequest), overrides)
    if current_age is None or retirement_age is None:
        raise ConfigurationError("--current-age and --retirement-age are required without --file")
    return RetirementPlanRequest(**{k: v for k, v in overrides.items() if v is not None})


def _use_defaults(ctx: click.Context, flag: Optional[bool]) -> bool:
    return ctx.obj["settings"].use_defaults if flag is None else flag


def _plan_rows(plan):
    return [
        ("Years to Retirement", f"{plan.years_to_retirement}"),
        ("Monthly Contribution", format_currency(plan.total_monthly_contribution)),
        ("Projected Balance", format_currency(plan.projected_balance)),
        ("Projected Monthly Income", format_currency(plan.projected_monthly_income)),
        ("Income in Today's Dollars", format_currency(plan.inflation_adjusted_monthly_income)),
        ("Desired Monthly Income", format_currency(plan.desired_monthly_income)),
        ("Status", plan.status.label),
    ]


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(version=__version__, prog_name="retireplan")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def main(ctx: click.Context, quiet: bool) -> None:
    """
    RetirePlan - Retirement projection and benefit estimation.

    Projects savings to retirement, estimates Social Security benefits,
    suggests an age-banded allocation and compares what-if scenarios.

    Use 'retireplan COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    configure_logging(level=settings.effective_log_level, format_json=settings.log_json)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = Console()
    ctx.obj["service"] = PlanningService.from_settings(settings)


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------

@main.command()
@plan_options
@click.option("--schedule", is_flag=True, help="Also print the year-by-year balance")
@click.option("--plot", "plot_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Save a balance chart (PNG)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Save the result as JSON")
@click.pass_context
@_handle_errors
def project(ctx: click.Context, file, user_id, current_age, retirement_age, savings,
            contribution, employer_match, desired_income, return_rate, inflation_rate,
            duration, use_defaults, schedule, plot_path, as_json, output) -> None:
    """
    Project a retirement plan.

    Example:
        retireplan project --current-age 42 --retirement-age 65 --use-defaults
    """
    from .serialization import plan_to_dict, save_result

    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    service: PlanningService = ctx.obj["service"]

    request = _plan_request(file, user_id, current_age, retirement_age, savings, contribution,
                            employer_match, desired_income, return_rate, inflation_rate, duration)
    plan = service.retirement_plan(request, use_defaults=_use_defaults(ctx, use_defaults))

    if as_json:
        _echo_json(plan_to_dict(plan))
    else:
        console.print(_kv_table("Retirement Projection", _plan_rows(plan)))
        if not quiet:
            console.print(plan.recommendation_text)

    if schedule and not as_json:
        frame = service.engine.balance_schedule(plan)
        table = Table(title="Balance Schedule", show_header=True)
        for column in ("Year", "Age", "Balance", "Contributions", "Growth"):
            table.add_column(column, justify="right")
        for year, row in frame.iterrows():
            table.add_row(
                f"{year}", f"{int(row['age'])}", f"${row['balance']:,.0f}",
                f"${row['contributions']:,.0f}", f"${row['growth']:,.0f}",
            )
        console.print(table)

    if plot_path:
        from .plotting import plot_balance_schedule

        plot_balance_schedule(plan, engine=service.engine, save_path=str(plot_path))
        if not quiet:
            click.echo(f"Chart saved to {plot_path}", err=as_json)

    if output:
        save_result(plan, output)
        if not quiet:
            click.echo(f"Result saved to {output}", err=as_json)


# ---------------------------------------------------------------------------
# benefits
# ---------------------------------------------------------------------------

@main.command()
@click.option("--file", "-f", "file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Social Security request (JSON)")
@click.option("--user-id", type=int, default=None)
@click.option("--salary", type=AMOUNT, default=None, help="Current annual salary")
@click.option("--dob", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Date of birth (YYYY-MM-DD)")
@click.option("--years", type=int, default=None, help="Years of work history")
@click.option("--as-of", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Date the age is measured on (default: today)")
@click.option("--use-defaults/--no-defaults", default=None)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
@_handle_errors
def benefits(ctx: click.Context, file, user_id, salary, dob, years, as_of,
             use_defaults, as_json) -> None:
    """
    Estimate Social Security benefits.

    Example:
        retireplan benefits --salary 78000 --dob 1983-05-15
    """
    from .serialization import profile_to_dict

    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    service: PlanningService = ctx.obj["service"]

    overrides = {
        "user_id": user_id,
        "current_annual_salary": salary,
        "date_of_birth": dob.date() if dob else None,
        "years_of_work_history": years,
    }
    if file is not None:
        request = _merge(_load(file, SocialSecurityRequest), overrides)
    else:
        request = SocialSecurityRequest(**{k: v for k, v in overrides.items() if v is not None})

    profile = service.social_security(
        request,
        use_defaults=_use_defaults(ctx, use_defaults),
        as_of=as_of.date() if as_of else None,
    )

    if as_json:
        _echo_json(profile_to_dict(profile))
        return

    console.print(_kv_table("Social Security Estimate", [
        ("Benefit at 62", format_currency(profile.benefit_at_62)),
        ("Benefit at 67", format_currency(profile.benefit_at_67)),
        ("Benefit at 70", format_currency(profile.benefit_at_70)),
        ("Full Retirement Age", f"{profile.full_retirement_age}"),
        ("Current Age", f"{profile.current_age}" if profile.current_age is not None else "N/A"),
    ]))
    if not quiet and profile.recommendation_text:
        console.print(profile.recommendation_text)


# ---------------------------------------------------------------------------
# allocate
# ---------------------------------------------------------------------------

@main.command()
@click.option("--file", "-f", "file", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Allocation request (JSON)")
@click.option("--user-id", type=int, default=None)
@click.option("--age", type=int, default=None, help="Investor age (default: 42)")
@click.option("--portfolio-value", type=AMOUNT, default=None, help="Portfolio value")
@click.option("--stocks", type=int, default=None, help="Custom stocks percent")
@click.option("--bonds", type=int, default=None, help="Custom bonds percent")
@click.option("--cash", type=int, default=None, help="Custom cash percent")
@click.option("--use-defaults/--no-defaults", default=None)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
@_handle_errors
def allocate(ctx: click.Context, file, user_id, age, portfolio_value, stocks, bonds, cash,
             use_defaults, as_json) -> None:
    """
    Recommend a stock/bond/cash allocation.

    Example:
        retireplan allocate --age 25 --portfolio-value 106965
    """
    from .serialization import strategy_to_dict

    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    service: PlanningService = ctx.obj["service"]

    overrides = {
        "user_id": user_id,
        "age": age,
        "portfolio_value": portfolio_value,
        "stocks_percent": stocks,
        "bonds_percent": bonds,
        "cash_percent": cash,
    }
    if file is not None:
        request = _merge(_load(file, AllocationRequest), overrides)
    else:
        request = AllocationRequest(**{k: v for k, v in overrides.items() if v is not None})

    strategy = service.investment_strategy(request, use_defaults=_use_defaults(ctx, use_defaults))

    if as_json:
        _echo_json(strategy_to_dict(strategy))
        return

    table = Table(title=f"{strategy.strategy_name} (risk: {strategy.risk_level})", show_header=True)
    table.add_column("Asset", style="cyan")
    table.add_column("Percent", justify="right")
    table.add_column("Amount", style="green", justify="right")
    table.add_row("Stocks", f"{strategy.stocks_percent}%", format_currency(strategy.stocks_amount))
    table.add_row("Bonds", f"{strategy.bonds_percent}%", format_currency(strategy.bonds_amount))
    table.add_row("Cash", f"{strategy.cash_percent}%", format_currency(strategy.cash_amount))
    console.print(table)

    if not quiet:
        console.print(strategy.recommendation_text)
        for item in strategy.recommendations:
            console.print(f"  - {item}")


# ---------------------------------------------------------------------------
# compare
# ---------------------------------------------------------------------------

@main.command()
@plan_options
@click.option("--increased-contribution", type=AMOUNT, default=None,
              help="Absolute contribution for scenario A (default: baseline x ratio)")
@click.option("--plot", "plot_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Save a comparison chart (PNG)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
@_handle_errors
def compare(ctx: click.Context, file, user_id, current_age, retirement_age, savings,
            contribution, employer_match, desired_income, return_rate, inflation_rate,
            duration, use_defaults, increased_contribution, plot_path, as_json) -> None:
    """
    Compare what-if scenarios.

    Example:
        retireplan compare --current-age 42 --retirement-age 65 --use-defaults
    """
    from .serialization import scenarios_to_dict

    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    service: PlanningService = ctx.obj["service"]

    request = _plan_request(file, user_id, current_age, retirement_age, savings, contribution,
                            employer_match, desired_income, return_rate, inflation_rate, duration)
    scenarios = service.scenarios(
        request,
        use_defaults=_use_defaults(ctx, use_defaults),
        increased_contribution=increased_contribution,
    )

    if as_json:
        _echo_json(scenarios_to_dict(scenarios))
    else:
        table = Table(title="What-If Scenarios", show_header=True)
        table.add_column("Scenario", style="cyan")
        table.add_column("Description")
        table.add_column("Balance", justify="right")
        table.add_column("Monthly Income", justify="right")
        table.add_column("Status")
        for label, scenario in scenarios.items():
            plan = scenario.plan
            table.add_row(
                label,
                scenario.description,
                format_currency(plan.projected_balance),
                format_currency(plan.projected_monthly_income),
                plan.status.label,
            )
        console.print(table)

    if plot_path:
        from .plotting import plot_scenarios

        plot_scenarios(scenarios, save_path=str(plot_path))
        if not quiet:
            click.echo(f"Chart saved to {plot_path}", err=as_json)


# ---------------------------------------------------------------------------
# dashboard
# ---------------------------------------------------------------------------

@main.command()
@plan_options
@click.option("--salary", type=AMOUNT, default=None, help="Current annual salary")
@click.option("--dob", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Date of birth (YYYY-MM-DD)")
@click.option("--portfolio-value", type=AMOUNT, default=None, help="Portfolio value")
@click.option("--as-of", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Date the age is measured on (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
@_handle_errors
def dashboard(ctx: click.Context, file, user_id, current_age, retirement_age, savings,
              contribution, employer_match, desired_income, return_rate, inflation_rate,
              duration, use_defaults, salary, dob, portfolio_value, as_of, as_json) -> None:
    """
    Plan, Social Security and allocation in one view.

    Example:
        retireplan dashboard --current-age 42 --retirement-age 65 --use-defaults
    """
    from .serialization import dashboard_to_dict

    console = ctx.obj["console"]
    service: PlanningService = ctx.obj["service"]

    plan_request = _plan_request(file, user_id, current_age, retirement_age, savings,
                                 contribution, employer_match, desired_income, return_rate,
                                 inflation_rate, duration)
    benefit_request = SocialSecurityRequest(
        user_id=plan_request.user_id,
        current_annual_salary=salary,
        date_of_birth=dob.date() if dob else None,
    )
    allocation_request = AllocationRequest(
        user_id=plan_request.user_id,
        portfolio_value=portfolio_value,
    )
    result = service.dashboard(
        plan_request,
        benefit_request,
        allocation_request,
        use_defaults=_use_defaults(ctx, use_defaults),
        as_of=as_of.date() if as_of else None,
    )

    if as_json:
        _echo_json(dashboard_to_dict(result))
        return

    summary = result.summary
    console.print(Panel(
        "\n".join([
            f"[cyan]Projected retirement income:[/cyan] {summary['projected_retirement_income']}",
            f"[cyan]Social Security at 67:[/cyan] {summary['social_security_benefit']}",
            f"[cyan]Portfolio value:[/cyan] {summary['portfolio_value']}",
            f"[cyan]Overall status:[/cyan] {summary['overall_status']}",
            f"[cyan]Strategy:[/cyan] {result.investment_strategy.strategy_name}",
        ]),
        title="Planning Dashboard",
        border_style="green",
    ))


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "retirement_plan": {
        "kind": "retirement_plan",
        "current_age": 42,
        "retirement_age": 65,
        "current_savings": "106965.67",
        "monthly_contribution": "650",
        "employer_match": "325",
        "desired_monthly_income": "6200",
        "expected_annual_return_rate_percent": "7.0",
        "expected_annual_inflation_rate_percent": "2.5",
        "expected_retirement_duration_years": 25,
    },
    "social_security": {
        "kind": "social_security",
        "date_of_birth": "1983-05-15",
        "current_annual_salary": "78000",
        "years_of_work_history": 20,
    },
    "allocation": {
        "kind": "allocation",
        "age": 42,
        "portfolio_value": "106965",
    },
}


@main.group()
def config() -> None:
    """
    Request file commands.

    Create and validate JSON request files.
    """
    pass


@config.command("create")
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--kind", "-k", type=click.Choice(sorted(_TEMPLATES)), default="retirement_plan")
@click.pass_context
def config_create(ctx: click.Context, output_file: Path, kind: str) -> None:
    """
    Create a request file from a template.

    Example:
        retireplan config create plan.json --kind retirement_plan
    """
    from .serialization import SCHEMA_VERSION

    data = {"schema_version": SCHEMA_VERSION, **_TEMPLATES[kind]}
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

    if not ctx.obj["quiet"]:
        click.echo(f"Created {kind} request: {output_file}")


@config.command("validate")
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
@_handle_errors
def config_validate(ctx: click.Context, request_file: Path) -> None:
    """
    Validate a request file.

    Example:
        retireplan config validate plan.json
    """
    from .serialization import load_request

    request = load_request(request_file)
    missing = [name for name, value in request.model_dump().items() if value is None]

    click.echo(f"Request is valid ({request.kind})")
    if missing and not ctx.obj["quiet"]:
        click.echo(f"Absent fields: {', '.join(missing)}")


if __name__ == "__main__":
    main()
