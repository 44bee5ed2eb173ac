"""
Months -- calendar month arithmetic for contract terms.

Responsibility:
    Date helpers the revenue engines need on top of ``dateutil``: term
    end-date derivation, elapsed calendar months, and calendar-month
    iteration with clipping to a service period.

Architecture position:
    Kernel > Domain -- pure functions, zero I/O, no clock access.

Invariants enforced:
    - Month addition is ``relativedelta(months=n)``, which clamps the
      day to the last day of the target month (Jan 31 + 1 month ->
      Feb 28/29), never overflowing into the next.
    - ``term_end_date(start, n)`` is ``start + n months - 1 day``.
    - Month iteration is inclusive of both the start and end months.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


def days_in_month(year: int, month: int) -> int:
    """Number of days in a calendar month (leap-year aware)."""
    return calendar.monthrange(year, month)[1]


def month_name(month: int) -> str:
    """Full English month name, e.g. 1 -> 'January'."""
    return calendar.month_name[month]


def first_of_month(value: date) -> date:
    return value.replace(day=1)


def last_of_month(value: date) -> date:
    return first_of_month(value) + relativedelta(months=1) - timedelta(days=1)


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by whole months; may be negative. Day is clamped."""
    return value + relativedelta(months=months)


def term_end_date(start: date, term_months: int) -> date:
    """Last day covered by a term of ``term_months`` starting on ``start``."""
    return start + relativedelta(months=term_months) - timedelta(days=1)


def months_between(start: date, later: date) -> int:
    """Calendar months from ``start``'s month to ``later``'s month."""
    delta = relativedelta(first_of_month(later), first_of_month(start))
    return delta.years * 12 + delta.months


def iter_calendar_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    """Yield ``(year, month)`` for every calendar month from start to end."""
    current = first_of_month(start)
    while current <= end:
        yield current.year, current.month
        current += relativedelta(months=1)


def clip_to_month(
    year: int, month: int, start: date, end: date
) -> tuple[date, date] | None:
    """
    Intersect the period ``[start, end]`` with a calendar month.

    Returns:
        ``(clipped_start, clipped_end)`` or None when the month holds no
        days of the period.
    """
    month_start = date(year, month, 1)
    month_end = date(year, month, days_in_month(year, month))
    clipped_start = max(start, month_start)
    clipped_end = min(end, month_end)
    if clipped_start > clipped_end:
        return None
    return clipped_start, clipped_end
