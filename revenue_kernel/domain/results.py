"""
Result value objects produced by the revenue engines.

All results are frozen, created fresh per calculation and never persisted
by the engines.  ``to_dict`` gives callers a plain mapping for export;
Decimal and date values are kept as-is so the caller picks the encoding.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class MonthlyRevenue:
    """One entry of the rev-rec breakdown, labelled ``YYYY-MM``."""

    month: str
    mrr: Decimal
    arr: Decimal
    gaap_mrr: Decimal

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BillingPeriod:
    """
    The slice of a service's billing period falling in one calendar month.

    Attributes:
        billing_start / billing_end: Period clipped to the calendar month.
        days_billed: Inclusive day count of the clipped period.
        proration_factor: ``days_billed / days_in_month``.
    """

    year: int
    month: int
    month_name: str
    billing_start: date
    billing_end: date
    days_in_month: int
    days_billed: int
    proration_factor: Decimal

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MonthlyInvoice:
    """
    A prorated invoice for one calendar month of service.

    ``mrr_rate`` is the escalated monthly rate in force for the month;
    ``invoice_amount`` is that rate scaled by the days actually billed.
    """

    year: int
    month: int
    month_name: str
    billing_start: date
    billing_end: date
    days_in_month: int
    days_billed: int
    mrr_rate: Decimal
    invoice_amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CalculationResult:
    """
    All headline revenue metrics for one service term.

    Attributes:
        tcv: Total contract value including NRCs and escalation.
        mrr: Base MRR (unescalated).
        arr: ``mrr * 12``.
        gaap_mrr: ``(tcv - nrcs) / term_months``.
        monthly_values: Rev-rec breakdown, one entry per month stepped.
    """

    tcv: Decimal
    mrr: Decimal
    arr: Decimal
    gaap_mrr: Decimal
    monthly_values: tuple[MonthlyRevenue, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "tcv": self.tcv,
            "mrr": self.mrr,
            "arr": self.arr,
            "gaap_mrr": self.gaap_mrr,
            "monthly_values": [m.to_dict() for m in self.monthly_values],
        }
