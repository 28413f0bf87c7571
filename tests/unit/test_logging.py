"""
Unit tests for logging.py module.

Tests structlog configuration and that calculators emit structured events.
"""

import json
import logging
from decimal import Decimal

import pytest

from retireplan.config import RetirementPlanRequest, apply_defaults
from retireplan.logging import configure_library_defaults, configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging(level="WARNING")


class TestConfigureLogging:
    """Test configure_logging."""

    def test_sets_root_level(self):
        configure_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

        configure_logging(level="error")
        assert logging.getLogger().level == logging.ERROR

    def test_json_output(self, capsys):
        configure_logging(level="INFO", format_json=True)
        get_logger("retireplan.test").info("something_happened", amount="10.00")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "something_happened"
        assert event["amount"] == "10.00"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filters_events(self, capsys):
        configure_logging(level="WARNING", format_json=True)
        get_logger("retireplan.test").info("hidden_event")
        assert "hidden_event" not in capsys.readouterr().err


class TestLibraryDefaults:
    """Behaviour before the application configures logging."""

    def test_debug_events_are_silent(self, capsys):
        configure_library_defaults()
        get_logger("retireplan.test").debug("plan_projected", years=23)
        get_logger("retireplan.test").info("defaults_applied")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_warnings_go_to_stderr(self, capsys):
        configure_library_defaults()
        get_logger("retireplan.test").warning("something_odd")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "something_odd" in captured.err

    def test_library_calls_print_nothing(self, capsys, engine, sample_plan):
        configure_library_defaults()
        engine.project(sample_plan)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestDomainEvents:
    """Calculators log what they substitute."""

    def test_defaults_applied_is_logged(self, capsys):
        configure_logging(level="INFO", format_json=True, include_timestamp=False)
        apply_defaults(RetirementPlanRequest(
            current_age=42, retirement_age=65, current_savings=Decimal("1"),
        ))

        events = [json.loads(line) for line in capsys.readouterr().err.strip().splitlines()]
        applied = [e for e in events if e["event"] == "defaults_applied"]
        assert applied
        assert "current_savings" not in applied[-1]["fields"]
        assert "monthly_contribution" in applied[-1]["fields"]

    def test_complete_request_logs_no_defaults(self, capsys, plan_request):
        configure_logging(level="INFO", format_json=True, include_timestamp=False)
        apply_defaults(plan_request)
        assert "defaults_applied" not in capsys.readouterr().err
