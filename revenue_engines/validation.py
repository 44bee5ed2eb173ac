"""
revenue_engines.validation -- Input Validator for service terms.

Responsibility:
    Decide whether a ServiceTerm carries enough, and consistent enough,
    data for the revenue engines to calculate on.  Failures are returned
    as a list of human-readable messages, never raised.

Architecture position:
    Engines -- leaf of the engine dependency order.  Every other engine
    calls ``validate_service_term`` first and degrades to zero / empty
    output when the list is non-empty.

Invariants enforced:
    - The error list is empty iff the term is safe to calculate on.
    - Messages are distinct per check and stable (callers surface them
      as form errors).
    - No side effects, no exceptions for any input value; NaN and
      infinite amounts fail their check instead of raising on comparison.

Supplementary checks:
    ``validate_term_alignment`` and ``validate_date_order`` are the
    record-level rules service lines apply on top of the calculation
    gate: end dates must follow start dates, and a stored end date must
    sit within a tolerance of ``start + term_months months - 1 day``.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from revenue_kernel.domain.months import term_end_date
from revenue_kernel.domain.service_term import ServiceTerm

SERVICE_REQUIRED = "Service is required"
MRR_REQUIRED = "MRR is required"
TERM_MONTHS_REQUIRED = "Term months is required"
END_BEFORE_START = "End date must be after or equal to start date"
ESCALATOR_OUT_OF_RANGE = "Annual escalator must be between 0 and 100"
NRCS_NOT_FINITE = "NRCs must be a finite amount"

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def validate_service_term(term: ServiceTerm | None) -> list[str]:
    """
    Check a term's numeric and date preconditions.

    Postconditions:
        - Returns ``[]`` when every check passes.
        - Returns ``["Service is required"]`` alone for a missing term.
        - Otherwise one message per failed check, in check order.
    """
    if term is None:
        return [SERVICE_REQUIRED]

    errors: list[str] = []

    if term.mrr is None or not term.mrr.is_finite() or term.mrr < _ZERO:
        errors.append(MRR_REQUIRED)

    if term.term_months is None or term.term_months <= 0:
        errors.append(TERM_MONTHS_REQUIRED)

    if (
        term.billing_start_date is not None
        and term.billing_end_date is not None
        and term.billing_end_date < term.billing_start_date
    ):
        errors.append(END_BEFORE_START)

    escalator = term.annual_escalator_percent
    if escalator is not None and (
        not escalator.is_finite() or not (_ZERO <= escalator <= _HUNDRED)
    ):
        errors.append(ESCALATOR_OUT_OF_RANGE)

    if term.nrcs is not None and not term.nrcs.is_finite():
        errors.append(NRCS_NOT_FINITE)

    return errors


def is_calculable(term: ServiceTerm | None) -> bool:
    """True when ``validate_service_term`` reports no errors."""
    return not validate_service_term(term)


def validate_date_order(
    start: date | None,
    end: date | None,
    message: str,
) -> list[str]:
    """Require ``end`` strictly after ``start`` when both are present."""
    if start is not None and end is not None and end <= start:
        return [message]
    return []


def validate_term_alignment(
    start: date | None,
    end: date | None,
    term_months: int | None,
    tolerance_days: int,
    message: str,
) -> list[str]:
    """
    Require a stored end date to match the term length.

    The expected end is ``start + term_months months - 1 day``; ``end``
    may differ from it by up to ``tolerance_days`` either way.  Skipped
    when any input is missing or the term is not positive.
    """
    if start is None or end is None or term_months is None or term_months <= 0:
        return []
    expected = term_end_date(start, term_months)
    slack = timedelta(days=tolerance_days)
    if expected - slack <= end <= expected + slack:
        return []
    return [message]
