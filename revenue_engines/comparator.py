"""
revenue_engines.comparator -- Net-new value between two service terms.

Responsibility:
    Measure the incremental contract value of a renewal, upgrade or
    downgrade relative to the term it replaces.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends only on revenue_engines.calculator (TCV).

Invariants enforced:
    - ``net_new(current, None) == tcv(current)``: a brand-new service is
      entirely net new.
    - ``net_new(current, original) == tcv(current) - tcv(original)``.
    - Negative results are valid and mean a downgrade; they are never
      clamped or reported as errors.
    - An invalid term contributes a TCV of zero (fail-safe).
"""

from __future__ import annotations

from decimal import Decimal

from revenue_engines.calculator import calculate_tcv
from revenue_engines.tracer import traced_engine
from revenue_kernel.domain.service_term import ServiceTerm
from revenue_kernel.logging_config import get_logger

logger = get_logger("engines.comparator")


@traced_engine(
    "revenue.net_new_value", "1.0",
    fingerprint_fields=("current_term", "original_term"),
)
def calculate_net_new_value(
    current_term: ServiceTerm | None,
    original_term: ServiceTerm | None = None,
) -> Decimal:
    """
    Incremental TCV of ``current_term`` over ``original_term``.

    Args:
        current_term: The renewed / upgraded / downgraded term.
        original_term: The term being replaced, or None for new business.

    Returns:
        Decimal net-new value; negative for downgrades.
    """
    current_tcv = calculate_tcv(current_term)
    if original_term is None:
        return current_tcv

    original_tcv = calculate_tcv(original_term)
    net_new = current_tcv - original_tcv

    logger.info("net_new_value_calculated", extra={
        "current_tcv": str(current_tcv),
        "original_tcv": str(original_tcv),
        "net_new_value": str(net_new),
        "is_downgrade": net_new < 0,
    })
    return net_new
