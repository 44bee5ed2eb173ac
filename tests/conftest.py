"""
Pytest fixtures for the revenue engine test suite.

Provides:
- Structured logging configured once per session
- LogContext isolation between tests
- A log capture fixture returning parsed JSON records
- Common service term builders
"""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from revenue_kernel.domain.service_term import ServiceTerm
from revenue_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture revenue_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            calculate_tcv(term)
            logs = captured_logs()
            assert any(r["message"] == "REVENUE_ENGINE_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("revenue_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Service term fixtures
# =============================================================================


@pytest.fixture
def simple_term():
    """1000/month for 12 months with a 500 setup fee, no escalation."""
    return ServiceTerm.of(
        mrr="1000",
        term_months=12,
        nrcs="500",
        annual_escalator_percent="0",
        billing_start_date=date(2025, 1, 1),
    )


@pytest.fixture
def escalating_term():
    """1000/month for 36 months at 3% a year with a 1000 setup fee."""
    return ServiceTerm.of(
        mrr="1000",
        term_months=36,
        nrcs="1000",
        annual_escalator_percent="3",
        billing_start_date=date(2025, 1, 1),
    )


@pytest.fixture
def mid_month_term():
    """Three months of billing starting mid-January."""
    return ServiceTerm(
        mrr=Decimal("1000"),
        term_months=3,
        billing_start_date=date(2025, 1, 14),
        billing_end_date=date(2025, 4, 13),
    )
