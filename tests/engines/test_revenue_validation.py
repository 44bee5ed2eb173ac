"""Tests for the Input Validator (revenue_engines/validation.py)."""

from datetime import date
from decimal import Decimal

from revenue_engines.calculator import calculate_all, calculate_tcv
from revenue_engines.validation import (
    END_BEFORE_START,
    ESCALATOR_OUT_OF_RANGE,
    MRR_REQUIRED,
    NRCS_NOT_FINITE,
    SERVICE_REQUIRED,
    TERM_MONTHS_REQUIRED,
    is_calculable,
    validate_date_order,
    validate_service_term,
    validate_term_alignment,
)
from revenue_kernel.domain.service_term import ServiceTerm


class TestValidateServiceTerm:
    """Calculation gate for service terms."""

    def test_valid_term(self, simple_term):
        assert validate_service_term(simple_term) == []
        assert is_calculable(simple_term)

    def test_missing_term(self):
        assert validate_service_term(None) == [SERVICE_REQUIRED]
        assert not is_calculable(None)

    def test_missing_mrr(self):
        errors = validate_service_term(ServiceTerm.of(term_months=12))
        assert errors == [MRR_REQUIRED]

    def test_negative_mrr(self):
        errors = validate_service_term(ServiceTerm.of(mrr="-1", term_months=12))
        assert errors == [MRR_REQUIRED]

    def test_zero_mrr_is_valid(self):
        assert validate_service_term(ServiceTerm.of(mrr="0", term_months=12)) == []

    def test_term_months_required(self):
        assert validate_service_term(ServiceTerm.of(mrr="100")) == [TERM_MONTHS_REQUIRED]
        assert validate_service_term(ServiceTerm.of(mrr="100", term_months=0)) == [TERM_MONTHS_REQUIRED]
        assert validate_service_term(ServiceTerm.of(mrr="100", term_months=-3)) == [TERM_MONTHS_REQUIRED]

    def test_end_before_start(self):
        term = ServiceTerm.of(
            mrr="100",
            term_months=12,
            billing_start_date=date(2025, 6, 1),
            billing_end_date=date(2025, 5, 31),
        )
        assert validate_service_term(term) == [END_BEFORE_START]

    def test_end_equal_to_start_allowed(self):
        term = ServiceTerm.of(
            mrr="100",
            term_months=1,
            billing_start_date=date(2025, 6, 1),
            billing_end_date=date(2025, 6, 1),
        )
        assert validate_service_term(term) == []

    def test_escalator_range(self):
        for value in ("0", "3", "100"):
            term = ServiceTerm.of(mrr="100", term_months=12, annual_escalator_percent=value)
            assert validate_service_term(term) == []
        for value in ("-0.01", "100.01"):
            term = ServiceTerm.of(mrr="100", term_months=12, annual_escalator_percent=value)
            assert validate_service_term(term) == [ESCALATOR_OUT_OF_RANGE]

    def test_nan_mrr_fails_instead_of_raising(self):
        term = ServiceTerm(mrr=Decimal("NaN"), term_months=12)
        assert validate_service_term(term) == [MRR_REQUIRED]
        assert calculate_tcv(term) == Decimal("0")
        assert calculate_all(term).monthly_values == ()

    def test_non_finite_escalator_and_nrcs(self):
        term = ServiceTerm(
            mrr=Decimal("100"),
            term_months=12,
            nrcs=Decimal("Infinity"),
            annual_escalator_percent=Decimal("NaN"),
        )
        assert validate_service_term(term) == [ESCALATOR_OUT_OF_RANGE, NRCS_NOT_FINITE]

    def test_errors_in_check_order(self):
        term = ServiceTerm(
            mrr=None,
            term_months=None,
            annual_escalator_percent=Decimal("150"),
        )
        assert validate_service_term(term) == [
            MRR_REQUIRED,
            TERM_MONTHS_REQUIRED,
            ESCALATOR_OUT_OF_RANGE,
        ]


class TestRecordLevelChecks:
    """Date-order and alignment helpers used by service lines."""

    def test_date_order_strict(self):
        assert validate_date_order(date(2025, 1, 1), date(2025, 1, 1), "bad") == ["bad"]
        assert validate_date_order(date(2025, 1, 1), date(2025, 1, 2), "bad") == []

    def test_date_order_skips_missing(self):
        assert validate_date_order(None, date(2025, 1, 1), "bad") == []
        assert validate_date_order(date(2025, 1, 1), None, "bad") == []

    def test_alignment_exact(self):
        assert validate_term_alignment(date(2025, 1, 1), date(2025, 12, 31), 12, 1, "bad") == []

    def test_alignment_within_tolerance(self):
        assert validate_term_alignment(date(2025, 1, 1), date(2026, 1, 1), 12, 1, "bad") == []
        assert validate_term_alignment(date(2025, 1, 1), date(2025, 12, 30), 12, 1, "bad") == []

    def test_alignment_outside_tolerance(self):
        assert validate_term_alignment(date(2025, 1, 1), date(2026, 1, 2), 12, 1, "bad") == ["bad"]
        assert validate_term_alignment(date(2025, 1, 1), date(2026, 1, 1), 12, 0, "bad") == ["bad"]

    def test_alignment_skips_incomplete(self):
        assert validate_term_alignment(date(2025, 1, 1), None, 12, 1, "bad") == []
        assert validate_term_alignment(date(2025, 1, 1), date(2025, 3, 1), None, 1, "bad") == []
