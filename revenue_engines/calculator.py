"""
revenue_engines.calculator -- Core Calculator: TCV, MRR, ARR and GAAP MRR.

Responsibility:
    Turn a service's commercial terms into its headline revenue figures.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends on revenue_engines.validation; consumed by the schedule
    generator, the comparator and the RevenueCalculator facade.

Invariants enforced:
    - Escalation is annual and stepped: the monthly rate is constant for
      contract months 1-12 and is multiplied by ``1 + escalator/100`` at
      the start of months 13, 25, 37, ...  It is never compounded monthly.
    - ``arr == mrr * 12``; escalation never affects MRR or ARR.
    - ``gaap_mrr == (tcv - nrcs) / term_months``.
    - Fail-safe: an invalid term yields ``Decimal("0")``, never an
      exception.  Callers read ``validate_service_term`` for reasons.
    - Decimal-only arithmetic, unrounded; rounding is a presentation
      concern of the schedules.

Usage:
    from revenue_engines.calculator import calculate_tcv
    from revenue_kernel.domain import ServiceTerm

    term = ServiceTerm.of(mrr="1000", term_months=36,
                          annual_escalator_percent="3", nrcs="1000")
    calculate_tcv(term)  # 38090.80: 12000 + 12360 + 12730.80 + 1000
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from decimal import Decimal

from revenue_config.schema import DEFAULT_ENGINE_CONFIG, EngineConfig
from revenue_engines.tracer import traced_engine
from revenue_engines.validation import validate_service_term
from revenue_kernel.domain.results import CalculationResult
from revenue_kernel.domain.service_term import ResolvedTerm, ServiceTerm, resolve_term
from revenue_kernel.logging_config import get_logger

logger = get_logger("engines.calculator")

_ZERO = Decimal("0")
_MONTHS_PER_YEAR = 12


def escalating_rates(base: Decimal, factor: Decimal) -> Iterator[Decimal]:
    """
    Yield the monthly rate for contract months 1, 2, 3, ... indefinitely.

    The rate steps up by ``factor`` at the start of every 12th month
    after the first (months 13, 25, ...).
    """
    current = base
    month = 1
    while True:
        if month > 1 and (month - 1) % _MONTHS_PER_YEAR == 0:
            current = current * factor
        yield current
        month += 1


def resolve_valid_term(term: ServiceTerm | None, operation: str) -> ResolvedTerm | None:
    """Resolve defaults, or log and return None when the term is invalid."""
    errors = validate_service_term(term)
    if errors:
        logger.warning(f"{operation}_skipped_invalid_term", extra={"errors": errors})
        return None
    return resolve_term(term)


def _monthly_rates(resolved: ResolvedTerm) -> list[Decimal]:
    rates = escalating_rates(resolved.mrr, resolved.escalation_factor)
    return [next(rates) for _ in range(resolved.term_months)]


def _tcv(resolved: ResolvedTerm) -> Decimal:
    return sum(_monthly_rates(resolved), _ZERO) + resolved.nrcs


def contract_gaap_mrr(resolved: ResolvedTerm) -> Decimal:
    return (_tcv(resolved) - resolved.nrcs) / Decimal(resolved.term_months)


@traced_engine("revenue.monthly_rates", "1.0", fingerprint_fields=("term",))
def calculate_monthly_rates(term: ServiceTerm | None) -> list[Decimal]:
    """
    Escalated monthly rate for each contract month of the term.

    Postconditions:
        - ``len(result) == term_months`` for a valid term.
        - Returns ``[]`` for an invalid term.
    """
    resolved = resolve_valid_term(term, "monthly_rates")
    if resolved is None:
        return []
    return _monthly_rates(resolved)


@traced_engine("revenue.tcv", "1.0", fingerprint_fields=("term",))
def calculate_tcv(term: ServiceTerm | None) -> Decimal:
    """
    Total Contract Value including NRCs and annual escalation.

    Formula: sum of escalated monthly rates over ``term_months`` + nrcs.

    Returns:
        Decimal TCV, or ``Decimal("0")`` when the term is invalid.
    """
    resolved = resolve_valid_term(term, "tcv")
    if resolved is None:
        return _ZERO

    tcv = _tcv(resolved)
    logger.debug("tcv_calculated", extra={
        "mrr": str(resolved.mrr),
        "term_months": resolved.term_months,
        "annual_escalator_percent": str(resolved.annual_escalator_percent),
        "nrcs": str(resolved.nrcs),
        "tcv": str(tcv),
    })
    return tcv


@traced_engine("revenue.mrr", "1.0", fingerprint_fields=("term",))
def calculate_mrr(term: ServiceTerm | None) -> Decimal:
    """Base MRR, unescalated; ``Decimal("0")`` when invalid or absent."""
    resolved = resolve_valid_term(term, "mrr")
    if resolved is None:
        return _ZERO
    return resolved.mrr


@traced_engine("revenue.arr", "1.0", fingerprint_fields=("term",))
def calculate_arr(term: ServiceTerm | None) -> Decimal:
    """Annual Recurring Revenue: ``calculate_mrr(term) * 12``."""
    return calculate_mrr(term) * _MONTHS_PER_YEAR


@traced_engine("revenue.gaap_mrr", "1.0", fingerprint_fields=("term",))
def calculate_gaap_mrr(term: ServiceTerm | None) -> Decimal:
    """
    GAAP MRR: ``(tcv - nrcs) / term_months``.

    Smooths escalation into a flat contract-level average; distinct from
    ``calculate_mrr``, which stays at the unescalated base.
    """
    resolved = resolve_valid_term(term, "gaap_mrr")
    if resolved is None:
        return _ZERO
    return contract_gaap_mrr(resolved)


@traced_engine("revenue.calculate_all", "1.0", fingerprint_fields=("term",))
def calculate_all(
    term: ServiceTerm | None,
    *,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> CalculationResult:
    """
    Calculate every headline metric plus the rev-rec breakdown.

    Returns:
        CalculationResult; all zeros and an empty breakdown when invalid.
    """
    # Imported here: schedules depends on this module.
    from revenue_engines.schedules import calculate_monthly_breakdown

    t0 = time.monotonic()
    logger.info("revenue_calculation_started", extra={
        "mrr": str(term.mrr) if term is not None else None,
        "term_months": term.term_months if term is not None else None,
    })

    resolved = resolve_valid_term(term, "calculate_all")
    if resolved is None:
        return CalculationResult(tcv=_ZERO, mrr=_ZERO, arr=_ZERO, gaap_mrr=_ZERO)

    tcv = _tcv(resolved)
    result = CalculationResult(
        tcv=tcv,
        mrr=resolved.mrr,
        arr=resolved.mrr * _MONTHS_PER_YEAR,
        gaap_mrr=(tcv - resolved.nrcs) / Decimal(resolved.term_months),
        monthly_values=tuple(calculate_monthly_breakdown(term, config=config)),
    )

    logger.info("revenue_calculation_completed", extra={
        "tcv": str(result.tcv),
        "mrr": str(result.mrr),
        "arr": str(result.arr),
        "gaap_mrr": str(result.gaap_mrr),
        "month_count": len(result.monthly_values),
        "duration_ms": round((time.monotonic() - t0) * 1000, 2),
    })
    return result
