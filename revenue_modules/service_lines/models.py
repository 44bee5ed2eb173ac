"""
Module: revenue_modules.service_lines.models
Responsibility:
    Frozen domain DTOs for a service line on a sales order: what was
    sold, what is being delivered, and the revenue figures derived from
    them.

Architecture:
    revenue_modules layer -- pure data definitions with ZERO I/O.
    All models are frozen dataclasses; all money is Decimal.

    A service line carries two term snapshots.  ``as_sold`` is what the
    order booked and never changes after booking; ``as_delivered`` starts
    as a copy and moves with extensions.  The engines only ever see one
    snapshot at a time, projected into a ``ServiceTerm``.

Invariants:
    - All dataclasses are frozen (immutable); mutations return copies.
    - Enum values are lowercase strings for serialization safety.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class ServiceStatus(str, Enum):
    """Service lifecycle states."""

    PENDING_INSTALLATION = "pending_installation"
    ACTIVE = "active"
    EXTENDED = "extended"
    RENEWED = "renewed"
    CANCELED = "canceled"


class ServiceType(str, Enum):
    """Product families a service line may belong to."""

    INTERNET = "internet"
    VOICE = "voice"
    DATA = "data"
    CLOUD = "cloud"
    MANAGED_SERVICES = "managed_services"
    EQUIPMENT = "equipment"
    OTHER = "other"


class TermView(str, Enum):
    """Which term snapshot of a service line to calculate on."""

    AS_SOLD = "as_sold"
    AS_DELIVERED = "as_delivered"


EXTENDABLE_STATUSES: frozenset[ServiceStatus] = frozenset({
    ServiceStatus.ACTIVE,
    ServiceStatus.EXTENDED,
})


@dataclass(frozen=True)
class TermDates:
    """
    Term length plus billing and revenue-recognition bounds.

    End dates may be left None; ``helpers.fill_end_dates`` derives them
    from the start date and term length.
    """

    term_months: int | None = None
    billing_start_date: date | None = None
    billing_end_date: date | None = None
    rev_rec_start_date: date | None = None
    rev_rec_end_date: date | None = None


@dataclass(frozen=True)
class ServiceLine:
    """
    A service sold on an order.

    Attributes:
        service_name: Display name.
        service_type: Product family.
        status: Lifecycle state.
        units: Quantity sold; negative on de-book orders.
        unit_price: Price per unit per month.
        nrcs: One-time charges; negative on de-book orders.
        annual_escalator: Yearly increase percent, 0-100.
        mrr: Explicit MRR; when None, ``units * unit_price`` is used.
        as_sold: Term as booked.
        as_delivered: Term as delivered; None until synced from as_sold.
        is_de_book: True when the owning order reverses a prior booking.
        order_id: Owning order reference, stamped on log records.
        service_id: Service record reference, stamped on log records.
    """

    service_name: str
    service_type: ServiceType
    status: ServiceStatus = ServiceStatus.PENDING_INSTALLATION
    units: Decimal = Decimal("1")
    unit_price: Decimal = Decimal("0")
    nrcs: Decimal | None = None
    annual_escalator: Decimal | None = None
    mrr: Decimal | None = None
    as_sold: TermDates = field(default_factory=TermDates)
    as_delivered: TermDates | None = None
    is_de_book: bool = False
    order_id: str | None = None
    service_id: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.service_name} ({self.service_type.value})"


@dataclass(frozen=True)
class RevenueFields:
    """Scalar revenue figures a caller stores on its service record."""

    mrr: Decimal
    tcv: Decimal
    arr: Decimal
