"""
Pure domain layer.

Value objects and date arithmetic with NO dependencies on:
- Database
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from revenue_kernel.domain.months import (
    add_months,
    clip_to_month,
    days_in_month,
    first_of_month,
    iter_calendar_months,
    last_of_month,
    month_name,
    months_between,
    term_end_date,
)
from revenue_kernel.domain.results import (
    BillingPeriod,
    CalculationResult,
    MonthlyInvoice,
    MonthlyRevenue,
)
from revenue_kernel.domain.service_term import (
    ResolvedTerm,
    ServiceTerm,
    resolve_term,
    to_decimal,
)

__all__ = [
    # Terms
    "ServiceTerm",
    "ResolvedTerm",
    "resolve_term",
    "to_decimal",
    # Results
    "CalculationResult",
    "MonthlyRevenue",
    "MonthlyInvoice",
    "BillingPeriod",
    # Month arithmetic
    "add_months",
    "term_end_date",
    "days_in_month",
    "month_name",
    "months_between",
    "first_of_month",
    "last_of_month",
    "iter_calendar_months",
    "clip_to_month",
]
