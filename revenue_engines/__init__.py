"""
Module: revenue_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    revenue calculation engines.  This is the canonical import surface
    for higher layers (revenue_modules and the calling application).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May import revenue_kernel and revenue_config.schema.
    MUST NOT import revenue_modules.

Dependency order (leaves first):
    validation -> calculator -> schedules -> comparator

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
    - Decimal-only arithmetic: floats are never produced.
    - Fail-safe: invalid input yields ``Decimal("0")`` or ``[]``; the
      reasons are available from ``validate_service_term``.
    - Determinism: identical inputs always produce identical outputs.

Audit relevance:
    Every engine entry point is traced via ``@traced_engine``, emitting
    REVENUE_ENGINE_TRACE records with engine name, version, input
    fingerprint and duration.

Usage:
    from revenue_engines import calculate_tcv, calculate_monthly_invoices
    from revenue_engines import RevenueCalculator
"""

from revenue_kernel.logging_config import get_logger

logger = get_logger("engines")

from revenue_engines.calculator import (  # noqa: E402
    calculate_all,
    calculate_arr,
    calculate_gaap_mrr,
    calculate_monthly_rates,
    calculate_mrr,
    calculate_tcv,
    escalating_rates,
)
from revenue_engines.comparator import calculate_net_new_value  # noqa: E402
from revenue_engines.revenue_calculator import RevenueCalculator  # noqa: E402
from revenue_engines.schedules import (  # noqa: E402
    calculate_billing_periods,
    calculate_monthly_breakdown,
    calculate_monthly_invoices,
    calculate_total_invoiced,
    prorate_for_partial_month,
)
from revenue_engines.tracer import traced_engine  # noqa: E402
from revenue_engines.validation import (  # noqa: E402
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

__all__ = [
    # Input Validator
    "validate_service_term",
    "is_calculable",
    "validate_date_order",
    "validate_term_alignment",
    "SERVICE_REQUIRED",
    "MRR_REQUIRED",
    "TERM_MONTHS_REQUIRED",
    "END_BEFORE_START",
    "ESCALATOR_OUT_OF_RANGE",
    "NRCS_NOT_FINITE",
    # Core Calculator
    "calculate_tcv",
    "calculate_mrr",
    "calculate_arr",
    "calculate_gaap_mrr",
    "calculate_monthly_rates",
    "calculate_all",
    "escalating_rates",
    # Schedule Generator
    "calculate_monthly_breakdown",
    "calculate_monthly_invoices",
    "calculate_billing_periods",
    "calculate_total_invoiced",
    "prorate_for_partial_month",
    # Comparator
    "calculate_net_new_value",
    # Facade / tracing
    "RevenueCalculator",
    "traced_engine",
]
