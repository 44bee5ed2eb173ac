"""
Module: revenue_modules.service_lines.helpers
Responsibility:
    Pure functions that prepare service lines for the revenue engines and
    apply the record-level rules around them:
    - MRR fallback from units and unit price
    - End-date derivation and as-sold -> as-delivered sync
    - Record validation (date order, term alignment, units sign, enums)
    - Revenue fields to persist on save
    - Term extension and expiry checks

Architecture:
    revenue_modules layer -- pure functions with ZERO I/O.  "Today" is
    always an explicit ``as_of`` argument; nothing here reads the clock.
    Calls that log or reach the engines bind the line's ``order_id`` and
    ``service_id`` into ``LogContext`` so engine records carry them.

    Dependency direction:
        revenue_modules/service_lines  -->  revenue_engines
        revenue_modules/service_lines  -->  revenue_kernel
        revenue_modules/service_lines  -->  revenue_config.schema

Failure modes:
    - ``ServiceNotExtendableError`` when extending a service that is not
      active or extended.
    - ``InvalidExtensionError`` when the extension is not a positive
      number of months.
    - Validation never raises; it returns messages.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

from revenue_config.schema import DEFAULT_ENGINE_CONFIG, EngineConfig
from revenue_engines.calculator import calculate_all
from revenue_engines.validation import validate_date_order, validate_term_alignment
from revenue_kernel.domain.months import term_end_date
from revenue_kernel.domain.service_term import ServiceTerm
from revenue_kernel.exceptions import InvalidExtensionError, ServiceNotExtendableError
from revenue_kernel.logging_config import LogContext, get_logger
from revenue_modules.service_lines.models import (
    EXTENDABLE_STATUSES,
    RevenueFields,
    ServiceLine,
    ServiceStatus,
    ServiceType,
    TermDates,
    TermView,
)

logger = get_logger("modules.service_lines")

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_AMOUNT_FIELDS = ("units", "unit_price", "nrcs", "annual_escalator", "mrr")


def _log_scope(line: ServiceLine):
    return LogContext.bind(order_id=line.order_id, service_id=line.service_id)


def monthly_recurring_charge(line: ServiceLine) -> Decimal:
    """Base monthly charge before escalation: ``units * unit_price``."""
    return line.units * line.unit_price


def effective_mrr(line: ServiceLine) -> Decimal:
    """Explicit MRR when set, otherwise the monthly recurring charge."""
    return line.mrr if line.mrr is not None else monthly_recurring_charge(line)


def fill_end_dates(dates: TermDates) -> TermDates:
    """
    Derive missing end dates from start date and term length.

    Postconditions:
        - A missing end becomes ``start + term_months months - 1 day``
          when the start is present and ``term_months`` is positive.
        - Provided end dates are never overwritten.
    """
    if dates.term_months is None or dates.term_months <= 0:
        return dates

    billing_end = dates.billing_end_date
    if billing_end is None and dates.billing_start_date is not None:
        billing_end = term_end_date(dates.billing_start_date, dates.term_months)

    rev_rec_end = dates.rev_rec_end_date
    if rev_rec_end is None and dates.rev_rec_start_date is not None:
        rev_rec_end = term_end_date(dates.rev_rec_start_date, dates.term_months)

    return replace(dates, billing_end_date=billing_end, rev_rec_end_date=rev_rec_end)


def sync_as_delivered(line: ServiceLine) -> ServiceLine:
    """Fill each unset as-delivered field from its as-sold counterpart."""
    sold = line.as_sold
    delivered = line.as_delivered or TermDates()
    synced = TermDates(
        term_months=delivered.term_months if delivered.term_months is not None else sold.term_months,
        billing_start_date=delivered.billing_start_date or sold.billing_start_date,
        billing_end_date=delivered.billing_end_date or sold.billing_end_date,
        rev_rec_start_date=delivered.rev_rec_start_date or sold.rev_rec_start_date,
        rev_rec_end_date=delivered.rev_rec_end_date or sold.rev_rec_end_date,
    )
    return replace(line, as_delivered=synced)


def prepare_service_line(line: ServiceLine) -> ServiceLine:
    """
    Normalize a service line before validation and calculation.

    Fills as-sold end dates, syncs as-delivered from as-sold, then fills
    any as-delivered end dates still missing.
    """
    line = replace(line, as_sold=fill_end_dates(line.as_sold))
    line = sync_as_delivered(line)
    return replace(line, as_delivered=fill_end_dates(line.as_delivered))


def term_dates_for(line: ServiceLine, view: TermView) -> TermDates:
    if view is TermView.AS_SOLD:
        return line.as_sold
    return line.as_delivered or line.as_sold


def to_service_term(
    line: ServiceLine,
    view: TermView = TermView.AS_DELIVERED,
) -> ServiceTerm:
    """Project one term snapshot of a service line into a ServiceTerm."""
    dates = term_dates_for(line, view)
    return ServiceTerm(
        mrr=effective_mrr(line),
        term_months=dates.term_months,
        nrcs=line.nrcs,
        annual_escalator_percent=line.annual_escalator,
        billing_start_date=dates.billing_start_date,
        billing_end_date=dates.billing_end_date,
        rev_rec_start_date=dates.rev_rec_start_date,
        rev_rec_end_date=dates.rev_rec_end_date,
    )


def _validate_snapshot(
    dates: TermDates,
    suffix: str,
    tolerance_days: int,
) -> list[str]:
    errors: list[str] = []
    errors += validate_date_order(
        dates.billing_start_date,
        dates.billing_end_date,
        f"billing_end_date_{suffix} must be after billing start date",
    )
    errors += validate_date_order(
        dates.rev_rec_start_date,
        dates.rev_rec_end_date,
        f"rev_rec_end_date_{suffix} must be after revenue recognition start date",
    )
    errors += validate_term_alignment(
        dates.billing_start_date,
        dates.billing_end_date,
        dates.term_months,
        tolerance_days,
        f"term_months_{suffix} doesn't match the {suffix} billing date range",
    )
    return errors


def validate_service_line(
    line: ServiceLine,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[str]:
    """
    Record-level validation of a service line.

    Amounts that are NaN or infinite are reported alone.  Otherwise the
    checks run in order: required fields and ranges, enum membership,
    date order and term alignment for each snapshot, and the units/NRC
    sign rules for normal versus de-book orders.

    Returns:
        Human-readable messages; empty when the line is valid.
    """
    errors = [
        f"{name} must be a finite number"
        for name in _AMOUNT_FIELDS
        if getattr(line, name) is not None and not getattr(line, name).is_finite()
    ]
    # range checks below raise on NaN
    if not errors:
        errors = _record_errors(line, config)

    if errors:
        with _log_scope(line):
            logger.info("service_line_validation_failed", extra={
                "service_name": line.service_name,
                "error_count": len(errors),
                "errors": errors,
            })
    return errors


def _record_errors(line: ServiceLine, config: EngineConfig) -> list[str]:
    errors: list[str] = []
    sold = line.as_sold

    if not line.service_name:
        errors.append("service_name can't be blank")
    if not isinstance(line.service_type, ServiceType):
        errors.append("service_type is not included in the list")
    if not isinstance(line.status, ServiceStatus):
        errors.append("status is not included in the list")
    if sold.term_months is None or sold.term_months <= 0:
        errors.append("term_months_as_sold must be greater than 0")
    if sold.billing_start_date is None:
        errors.append("billing_start_date_as_sold can't be blank")
    if sold.rev_rec_start_date is None:
        errors.append("rev_rec_start_date_as_sold can't be blank")
    if line.unit_price < _ZERO:
        errors.append("unit_price must be greater than or equal to 0")
    if line.annual_escalator is not None and not (_ZERO <= line.annual_escalator <= _HUNDRED):
        errors.append("annual_escalator must be between 0 and 100")

    tolerance = config.term_alignment_tolerance_days
    errors += _validate_snapshot(sold, "as_sold", tolerance)
    if line.as_delivered is not None:
        errors += _validate_snapshot(line.as_delivered, "as_delivered", tolerance)

    if line.is_de_book:
        if line.units > _ZERO:
            errors.append("units must be negative for de-book orders")
        if line.nrcs is not None and line.nrcs > _ZERO:
            errors.append("nrcs must be negative for de-book orders")
    else:
        if line.units <= _ZERO:
            errors.append("units must be greater than 0")
        if line.nrcs is not None and line.nrcs < _ZERO:
            errors.append("nrcs must be greater than or equal to 0")

    return errors


def calculate_revenue_fields(
    line: ServiceLine,
    view: TermView = TermView.AS_DELIVERED,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> RevenueFields:
    """
    Revenue figures to store on the service record when it is saved.

    ``mrr`` is the entered MRR (or units * unit price), not GAAP MRR;
    ``tcv`` and ``arr`` come from the engines.
    """
    with _log_scope(line):
        result = calculate_all(to_service_term(line, view), config=config)
    return RevenueFields(mrr=effective_mrr(line), tcv=result.tcv, arr=result.arr)


def can_extend(line: ServiceLine) -> bool:
    return line.status in EXTENDABLE_STATUSES


def extend_by_months(line: ServiceLine, months: int) -> ServiceLine:
    """
    Extend the as-delivered term, leaving the as-sold term untouched.

    Postconditions:
        - ``as_delivered.term_months`` grows by ``months``.
        - Billing and rev-rec end dates are recomputed from their start
          dates and the new term length.

    Raises:
        InvalidExtensionError: If ``months`` is not positive.
        ServiceNotExtendableError: If the status is not active/extended.
    """
    if months <= 0:
        raise InvalidExtensionError(months)
    if not can_extend(line):
        raise ServiceNotExtendableError(line.service_name, line.status.value)

    delivered = prepare_service_line(line).as_delivered
    new_term = (delivered.term_months or 0) + months
    extended = replace(
        delivered,
        term_months=new_term,
        billing_end_date=(
            term_end_date(delivered.billing_start_date, new_term)
            if delivered.billing_start_date is not None else None
        ),
        rev_rec_end_date=(
            term_end_date(delivered.rev_rec_start_date, new_term)
            if delivered.rev_rec_start_date is not None else None
        ),
    )

    with _log_scope(line):
        logger.info("service_line_extended", extra={
            "service_name": line.service_name,
            "months": months,
            "term_months_as_delivered": new_term,
            "billing_end_date_as_delivered": extended.billing_end_date,
        })
    return replace(line, as_delivered=extended)


def _delivered_billing_end(line: ServiceLine) -> date | None:
    dates = line.as_delivered or line.as_sold
    return dates.billing_end_date


def days_remaining(line: ServiceLine, as_of: date) -> int:
    """Days from ``as_of`` until billing ends; negative once expired, 0 if unknown."""
    end = _delivered_billing_end(line)
    if end is None:
        return 0
    return (end - as_of).days


def is_expired(line: ServiceLine, as_of: date) -> bool:
    end = _delivered_billing_end(line)
    return end is not None and end < as_of


def is_expiring_soon(
    line: ServiceLine,
    as_of: date,
    window_days: int | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> bool:
    """Active and billing ends within the expiry window starting ``as_of``."""
    end = _delivered_billing_end(line)
    if end is None or line.status is not ServiceStatus.ACTIVE:
        return False
    window = config.expiry_window_days if window_days is None else window_days
    return as_of <= end <= as_of + timedelta(days=window)


def should_be_extended(line: ServiceLine, as_of: date) -> bool:
    """Active services past their billing end roll into ``extended``."""
    return line.status is ServiceStatus.ACTIVE and is_expired(line, as_of)
