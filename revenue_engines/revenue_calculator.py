"""
revenue_engines.revenue_calculator -- Convenience facade bound to one term.

Usage:
    from revenue_engines.revenue_calculator import RevenueCalculator

    calculator = RevenueCalculator(term)
    if calculator.errors:
        show_form_errors(calculator.errors)
    result = calculator.calculate_all()
"""

from __future__ import annotations

from decimal import Decimal

from revenue_config.schema import DEFAULT_ENGINE_CONFIG, EngineConfig
from revenue_engines import calculator, comparator, schedules
from revenue_engines.validation import validate_service_term
from revenue_kernel.domain.results import (
    BillingPeriod,
    CalculationResult,
    MonthlyInvoice,
    MonthlyRevenue,
)
from revenue_kernel.domain.service_term import ServiceTerm


class RevenueCalculator:
    """
    Revenue engine operations for a single service term.

    Contract:
        Stateless apart from the bound term and config.  Nothing is
        cached: every method recomputes from the term, so the facade is
        safe to share between threads and never serves stale figures.
    Guarantees:
        - Every calculation degrades to ``Decimal("0")`` or ``[]`` when
          ``errors`` is non-empty; none of them raise.
        - ``errors`` re-validates on each access.
    Non-goals:
        - Does not persist results onto the caller's record.
    """

    def __init__(
        self,
        term: ServiceTerm | None,
        *,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ):
        self._term = term
        self._config = config

    @property
    def term(self) -> ServiceTerm | None:
        return self._term

    @property
    def errors(self) -> list[str]:
        """Validation messages; empty when the term is calculable."""
        return validate_service_term(self._term)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def calculate_all(self) -> CalculationResult:
        return calculator.calculate_all(self._term, config=self._config)

    def calculate_tcv(self) -> Decimal:
        return calculator.calculate_tcv(self._term)

    def calculate_mrr(self) -> Decimal:
        return calculator.calculate_mrr(self._term)

    def calculate_arr(self) -> Decimal:
        return calculator.calculate_arr(self._term)

    def calculate_gaap_mrr(self) -> Decimal:
        return calculator.calculate_gaap_mrr(self._term)

    def calculate_monthly_breakdown(self) -> list[MonthlyRevenue]:
        return schedules.calculate_monthly_breakdown(self._term, config=self._config)

    def calculate_monthly_invoices(self) -> list[MonthlyInvoice]:
        return schedules.calculate_monthly_invoices(self._term, config=self._config)

    def calculate_billing_periods(self) -> list[BillingPeriod]:
        return schedules.calculate_billing_periods(self._term, config=self._config)

    def calculate_total_invoiced(self) -> Decimal:
        return schedules.calculate_total_invoiced(self._term, config=self._config)

    def prorate_for_partial_month(self) -> Decimal:
        return schedules.prorate_for_partial_month(self._term)

    def calculate_net_new_value(self, original_term: ServiceTerm | None = None) -> Decimal:
        """Incremental TCV over ``original_term`` (all of TCV when None)."""
        return comparator.calculate_net_new_value(self._term, original_term)
