"""
Module: revenue_modules.service_lines
Responsibility:
    Service lines on sales orders: the two term snapshots (as sold and as
    delivered), the record validation around them, the revenue fields
    stored on save, and the extension and expiry rules.

Architecture:
    revenue_modules layer -- frozen domain DTOs and pure helpers.
    All calculation flows through revenue_engines.

    Dependency direction (strict):
        revenue_modules/service_lines  -->  revenue_engines
        revenue_modules/service_lines  -->  revenue_kernel
        revenue_modules/service_lines  -X-> revenue_config loader (FORBIDDEN;
                                             callers pass an EngineConfig)

Failure modes:
    - ServiceNotExtendableError / InvalidExtensionError from
      ``extend_by_months``.
"""

from revenue_modules.service_lines.helpers import (
    calculate_revenue_fields,
    can_extend,
    days_remaining,
    effective_mrr,
    extend_by_months,
    fill_end_dates,
    is_expired,
    is_expiring_soon,
    monthly_recurring_charge,
    prepare_service_line,
    should_be_extended,
    sync_as_delivered,
    to_service_term,
    validate_service_line,
)
from revenue_modules.service_lines.models import (
    EXTENDABLE_STATUSES,
    RevenueFields,
    ServiceLine,
    ServiceStatus,
    ServiceType,
    TermDates,
    TermView,
)

__all__ = [
    "EXTENDABLE_STATUSES",
    "RevenueFields",
    "ServiceLine",
    "ServiceStatus",
    "ServiceType",
    "TermDates",
    "TermView",
    "calculate_revenue_fields",
    "can_extend",
    "days_remaining",
    "effective_mrr",
    "extend_by_months",
    "fill_end_dates",
    "is_expired",
    "is_expiring_soon",
    "monthly_recurring_charge",
    "prepare_service_line",
    "should_be_extended",
    "sync_as_delivered",
    "to_service_term",
    "validate_service_line",
]
