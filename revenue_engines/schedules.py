"""
revenue_engines.schedules -- Schedule Generator: breakdowns, invoices, proration.

Responsibility:
    Spread a service term over time:
    - ``calculate_monthly_breakdown``: rev-rec schedule, one entry per
      month stepped from the start date, escalating on the term's own
      year boundaries.
    - ``calculate_monthly_invoices``: one prorated invoice per calendar
      month touched by the billing period.
    - ``calculate_billing_periods``: the same calendar walk without money,
      exposing proration factors for audit.
    - ``calculate_total_invoiced`` and ``prorate_for_partial_month``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends on revenue_engines.calculator (escalation, GAAP MRR) and
    revenue_kernel.domain.months (calendar arithmetic).

Invariants enforced:
    - Breakdown escalation is keyed to the contract-month index (13, 25,
      ...), exactly as TCV.  Invoice escalation is keyed to calendar
      months elapsed since the billing start month.  The two agree for
      first-of-month starts and are deliberately left distinct otherwise.
    - Breakdown dates step one month at a time from the previous date, so
      a month-end start drifts (Jan 31, Feb 28, Mar 28, ...) and can touch
      one more calendar month than ``term_months``.
    - ``days_billed = (clipped_end - clipped_start).days + 1`` and
      ``days_in_month`` is leap-year aware.
    - Schedule money is rounded to ``config.amount_places``; proration
      factors to ``config.proration_places``; both with ``config.rounding``.
      ``prorate_for_partial_month`` returns the exact quotient.
    - Fail-safe: invalid terms or missing dates yield ``[]`` / ``0``.
"""

from __future__ import annotations

import time
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from revenue_config.schema import DEFAULT_ENGINE_CONFIG, EngineConfig
from revenue_engines.calculator import contract_gaap_mrr, escalating_rates, resolve_valid_term
from revenue_engines.tracer import traced_engine
from revenue_kernel.domain.months import (
    clip_to_month,
    days_in_month,
    iter_calendar_months,
    month_name,
    months_between,
)
from revenue_kernel.domain.results import BillingPeriod, MonthlyInvoice, MonthlyRevenue
from revenue_kernel.domain.service_term import ServiceTerm
from revenue_kernel.logging_config import get_logger

logger = get_logger("engines.schedules")

_ZERO = Decimal("0")


@traced_engine("revenue.monthly_breakdown", "1.0", fingerprint_fields=("term",))
def calculate_monthly_breakdown(
    term: ServiceTerm | None,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[MonthlyRevenue]:
    """
    Month-by-month revenue over the rev-rec period.

    Steps one month at a time from the previous date while it falls on
    or before the end date, so a month-end start drifts to the 28th after
    February.  Rev-rec dates are preferred; billing dates are the
    fallback.

    Postconditions:
        - Each entry's ``mrr`` is the escalated rate for that contract
          month; ``arr`` is ``mrr * 12``; ``gaap_mrr`` is the constant
          contract-level average.  All rounded to ``amount_places``.
        - Returns ``[]`` for an invalid term or missing dates.
    """
    resolved = resolve_valid_term(term, "monthly_breakdown")
    if resolved is None:
        return []

    start = resolved.recognition_start
    end = resolved.recognition_end
    if start is None or end is None:
        logger.info("monthly_breakdown_skipped_missing_dates", extra={
            "start": start,
            "end": end,
        })
        return []

    gaap_mrr = config.round_amount(contract_gaap_mrr(resolved))
    rates = escalating_rates(resolved.mrr, resolved.escalation_factor)

    breakdown: list[MonthlyRevenue] = []
    current = start
    while current <= end:
        rate = next(rates)
        breakdown.append(MonthlyRevenue(
            month=current.strftime("%Y-%m"),
            mrr=config.round_amount(rate),
            arr=config.round_amount(rate * 12),
            gaap_mrr=gaap_mrr,
        ))
        current += relativedelta(months=1)

    return breakdown


@traced_engine("revenue.monthly_invoices", "1.0", fingerprint_fields=("term",))
def calculate_monthly_invoices(
    term: ServiceTerm | None,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[MonthlyInvoice]:
    """
    Prorated invoices, one per calendar month of the billing period.

    Each month's billing window is the intersection of the service period
    and the calendar month.  The rate escalates when the number of
    calendar months elapsed since the start month is a positive multiple
    of 12, independent of the day billing starts.

    Postconditions:
        - ``invoice_amount = round(mrr_rate * days_billed / days_in_month)``.
        - Returns ``[]`` for an invalid term or missing billing dates.
    """
    t0 = time.monotonic()
    resolved = resolve_valid_term(term, "monthly_invoices")
    if resolved is None:
        return []

    start = resolved.billing_start_date
    end = resolved.billing_end_date
    if start is None or end is None:
        logger.info("monthly_invoices_skipped_missing_dates", extra={
            "start": start,
            "end": end,
        })
        return []

    factor = resolved.escalation_factor
    rate = resolved.mrr

    invoices: list[MonthlyInvoice] = []
    for year, month in iter_calendar_months(start, end):
        elapsed = months_between(start, date(year, month, 1))
        if elapsed > 0 and elapsed % 12 == 0:
            rate = rate * factor

        window = clip_to_month(year, month, start, end)
        if window is None:
            continue
        billing_start, billing_end = window
        month_days = days_in_month(year, month)
        days_billed = (billing_end - billing_start).days + 1

        invoices.append(MonthlyInvoice(
            year=year,
            month=month,
            month_name=month_name(month),
            billing_start=billing_start,
            billing_end=billing_end,
            days_in_month=month_days,
            days_billed=days_billed,
            mrr_rate=config.round_amount(rate),
            invoice_amount=config.round_amount(
                rate * Decimal(days_billed) / Decimal(month_days)
            ),
        ))

    logger.info("monthly_invoices_calculated", extra={
        "invoice_count": len(invoices),
        "billing_start": start,
        "billing_end": end,
        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
    })
    return invoices


@traced_engine("revenue.billing_periods", "1.0", fingerprint_fields=("term",))
def calculate_billing_periods(
    term: ServiceTerm | None,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> list[BillingPeriod]:
    """
    Calendar-month segments of the billing period with proration factors.

    Same walk and clipping as ``calculate_monthly_invoices`` with no
    escalation and no money.  ``proration_factor`` is
    ``days_billed / days_in_month`` rounded to ``proration_places``.
    """
    resolved = resolve_valid_term(term, "billing_periods")
    if resolved is None:
        return []

    start = resolved.billing_start_date
    end = resolved.billing_end_date
    if start is None or end is None:
        return []

    periods: list[BillingPeriod] = []
    for year, month in iter_calendar_months(start, end):
        window = clip_to_month(year, month, start, end)
        if window is None:
            continue
        billing_start, billing_end = window
        month_days = days_in_month(year, month)
        days_billed = (billing_end - billing_start).days + 1
        periods.append(BillingPeriod(
            year=year,
            month=month,
            month_name=month_name(month),
            billing_start=billing_start,
            billing_end=billing_end,
            days_in_month=month_days,
            days_billed=days_billed,
            proration_factor=config.round_factor(
                Decimal(days_billed) / Decimal(month_days)
            ),
        ))
    return periods


@traced_engine("revenue.total_invoiced", "1.0", fingerprint_fields=("term",))
def calculate_total_invoiced(
    term: ServiceTerm | None,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Decimal:
    """Sum of ``invoice_amount`` across the monthly invoices."""
    invoices = calculate_monthly_invoices(term, config=config)
    return sum((inv.invoice_amount for inv in invoices), _ZERO)


@traced_engine("revenue.prorate_partial_month", "1.0", fingerprint_fields=("term",))
def prorate_for_partial_month(term: ServiceTerm | None) -> Decimal:
    """
    First-month MRR prorated by the days remaining in the start month.

    Formula: ``mrr * (days_in_month - start_day + 1) / days_in_month``,
    left unrounded.  ``Decimal("0")`` for an invalid term or missing
    billing dates.
    """
    resolved = resolve_valid_term(term, "prorate_partial_month")
    if resolved is None:
        return _ZERO

    start = resolved.billing_start_date
    if start is None or resolved.billing_end_date is None:
        return _ZERO

    month_days = days_in_month(start.year, start.month)
    days_remaining = month_days - start.day + 1
    return resolved.mrr * Decimal(days_remaining) / Decimal(month_days)

