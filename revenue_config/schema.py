"""
Engine configuration schema.

``EngineConfig`` is the runtime artifact consumed by the revenue engines:
rounding precision for money and proration factors, the rounding mode,
and the tolerances used by service-line validation.  It is a frozen
dataclass with no I/O so engines can import it without pulling in YAML
loading.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Decimal,
)

ROUNDING_MODES: frozenset[str] = frozenset({
    ROUND_HALF_UP,
    ROUND_HALF_EVEN,
    ROUND_HALF_DOWN,
    ROUND_UP,
    ROUND_DOWN,
    ROUND_CEILING,
    ROUND_FLOOR,
})


@dataclass(frozen=True)
class EngineConfig:
    """
    Rounding and tolerance settings for the revenue engines.

    Attributes:
        amount_places: Decimal places for money in schedules and invoices.
        proration_places: Decimal places for billing-period proration factors.
        rounding: A ``decimal`` rounding mode name (e.g. ``ROUND_HALF_UP``).
        term_alignment_tolerance_days: Allowed drift, in days, between a
            stored end date and ``start + term_months months - 1 day``.
        expiry_window_days: Look-ahead used by "expiring soon" checks.
        version: Free-form label of the config source, for traces.
    """

    amount_places: int = 2
    proration_places: int = 6
    rounding: str = ROUND_HALF_UP
    term_alignment_tolerance_days: int = 1
    expiry_window_days: int = 30
    version: str = "builtin"

    @property
    def amount_quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.amount_places)

    @property
    def proration_quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.proration_places)

    def round_amount(self, value: Decimal) -> Decimal:
        """Round a money amount to ``amount_places``."""
        return value.quantize(self.amount_quantum, rounding=self.rounding)

    def round_factor(self, value: Decimal) -> Decimal:
        """Round a proration factor to ``proration_places``."""
        return value.quantize(self.proration_quantum, rounding=self.rounding)


DEFAULT_ENGINE_CONFIG = EngineConfig()
