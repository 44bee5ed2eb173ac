"""
ServiceTerm -- the commercial terms of one service, as seen by the engines.

Responsibility:
    Immutable input record for every revenue engine, plus the single place
    where absent values are given their defaults (``resolve_term``).

Architecture position:
    Kernel > Domain -- pure value objects, zero I/O.

Invariants enforced:
    - Monetary fields are Decimal or None -- never float.
    - Defaults are resolved once, explicitly, before any arithmetic:
      ``nrcs`` and ``annual_escalator_percent`` -> 0; a missing end date ->
      ``start + term_months months - 1 day`` when both are known.
    - ``resolve_term`` never raises and never validates; validity is the
      Input Validator's concern.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from revenue_kernel.domain.months import term_end_date

_ZERO = Decimal("0")


def to_decimal(value: Decimal | str | int | None) -> Decimal | None:
    """
    Coerce str/int to Decimal, leaving None untouched.

    Raises:
        TypeError: If ``value`` is a float or other non-decimal type.
        ValueError: If ``value`` is NaN or infinite.
    """
    if value is None:
        return None
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        value = Decimal(str(value))
    if not isinstance(value, Decimal):
        raise TypeError(f"Expected Decimal, str or int, got {type(value).__name__}")
    if not value.is_finite():
        raise ValueError(f"Amount must be finite, got {value}")
    return value


@dataclass(frozen=True)
class ServiceTerm:
    """
    Commercial terms of a service.

    Every field is optional because the engine must accept incomplete
    records and answer them with zero rather than an exception.

    Attributes:
        mrr: Base monthly recurring charge before escalation.
        term_months: Contract length in months.
        nrcs: One-time (non-recurring) charges.
        annual_escalator_percent: Yearly increase, 0-100.
        billing_start_date / billing_end_date: Billing period bounds.
        rev_rec_start_date / rev_rec_end_date: Revenue recognition bounds.
    """

    mrr: Decimal | None = None
    term_months: int | None = None
    nrcs: Decimal | None = None
    annual_escalator_percent: Decimal | None = None
    billing_start_date: date | None = None
    billing_end_date: date | None = None
    rev_rec_start_date: date | None = None
    rev_rec_end_date: date | None = None

    @classmethod
    def of(
        cls,
        *,
        mrr: Decimal | str | int | None = None,
        term_months: int | None = None,
        nrcs: Decimal | str | int | None = None,
        annual_escalator_percent: Decimal | str | int | None = None,
        billing_start_date: date | None = None,
        billing_end_date: date | None = None,
        rev_rec_start_date: date | None = None,
        rev_rec_end_date: date | None = None,
    ) -> ServiceTerm:
        """
        Factory accepting string/int amounts (no float allowed at call site).

        Raises:
            TypeError: If an amount is a float or other non-decimal type.
            ValueError: If an amount is NaN or infinite.
        """
        return cls(
            mrr=to_decimal(mrr),
            term_months=term_months,
            nrcs=to_decimal(nrcs),
            annual_escalator_percent=to_decimal(annual_escalator_percent),
            billing_start_date=billing_start_date,
            billing_end_date=billing_end_date,
            rev_rec_start_date=rev_rec_start_date,
            rev_rec_end_date=rev_rec_end_date,
        )


@dataclass(frozen=True)
class ResolvedTerm:
    """
    A ServiceTerm with defaults applied.

    ``mrr`` and ``term_months`` stay optional: their absence is a
    validation failure, not something to default away.
    """

    mrr: Decimal | None
    term_months: int | None
    nrcs: Decimal
    annual_escalator_percent: Decimal
    billing_start_date: date | None
    billing_end_date: date | None
    rev_rec_start_date: date | None
    rev_rec_end_date: date | None

    @property
    def escalation_factor(self) -> Decimal:
        """Multiplier applied at each contract-year boundary."""
        return Decimal("1") + self.annual_escalator_percent / Decimal("100")

    @property
    def recognition_start(self) -> date | None:
        """Rev-rec start, falling back to billing start."""
        return self.rev_rec_start_date or self.billing_start_date

    @property
    def recognition_end(self) -> date | None:
        """Rev-rec end, falling back to billing end."""
        return self.rev_rec_end_date or self.billing_end_date


def _default_end(start: date | None, end: date | None, term_months: int | None) -> date | None:
    if end is not None or start is None:
        return end
    if not isinstance(term_months, int) or term_months <= 0:
        return None
    return term_end_date(start, term_months)


def resolve_term(term: ServiceTerm) -> ResolvedTerm:
    """Apply default values to a ServiceTerm. Pure; never raises."""
    return ResolvedTerm(
        mrr=term.mrr,
        term_months=term.term_months,
        nrcs=term.nrcs if term.nrcs is not None else _ZERO,
        annual_escalator_percent=(
            term.annual_escalator_percent
            if term.annual_escalator_percent is not None
            else _ZERO
        ),
        billing_start_date=term.billing_start_date,
        billing_end_date=_default_end(
            term.billing_start_date, term.billing_end_date, term.term_months
        ),
        rev_rec_start_date=term.rev_rec_start_date,
        rev_rec_end_date=_default_end(
            term.rev_rec_start_date, term.rev_rec_end_date, term.term_months
        ),
    )
