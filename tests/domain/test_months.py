"""Tests for calendar month arithmetic (revenue_kernel/domain/months.py)."""

from datetime import date

import pytest

from revenue_kernel.domain.months import (
    add_months,
    clip_to_month,
    days_in_month,
    first_of_month,
    iter_calendar_months,
    last_of_month,
    month_name,
    months_between,
    term_end_date,
)


class TestDaysInMonth:

    @pytest.mark.parametrize("year,month,expected", [
        (2025, 1, 31),
        (2025, 2, 28),
        (2024, 2, 29),
        (2000, 2, 29),
        (1900, 2, 28),
        (2025, 4, 30),
    ])
    def test_days_in_month(self, year, month, expected):
        assert days_in_month(year, month) == expected

    def test_month_name(self):
        assert month_name(1) == "January"
        assert month_name(12) == "December"

    def test_first_and_last_of_month(self):
        assert first_of_month(date(2024, 2, 17)) == date(2024, 2, 1)
        assert last_of_month(date(2024, 2, 17)) == date(2024, 2, 29)


class TestAddMonths:
    """Month addition clamps to the end of short months."""

    def test_simple(self):
        assert add_months(date(2025, 1, 15), 1) == date(2025, 2, 15)

    def test_year_rollover(self):
        assert add_months(date(2025, 11, 30), 3) == date(2026, 2, 28)

    def test_clamps_month_end(self):
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_clamp_does_not_carry_forward(self):
        """Each addition is from the original date, so Mar 31 survives."""
        assert add_months(date(2025, 1, 31), 2) == date(2025, 3, 31)

    def test_negative(self):
        assert add_months(date(2025, 3, 31), -1) == date(2025, 2, 28)
        assert add_months(date(2025, 1, 10), -1) == date(2024, 12, 10)


class TestTermEndDate:

    def test_first_of_month_start(self):
        assert term_end_date(date(2025, 1, 1), 12) == date(2025, 12, 31)

    def test_mid_month_start(self):
        assert term_end_date(date(2025, 1, 14), 3) == date(2025, 4, 13)

    def test_month_end_start(self):
        assert term_end_date(date(2025, 1, 31), 1) == date(2025, 2, 27)


class TestMonthIteration:

    def test_months_between(self):
        assert months_between(date(2025, 1, 14), date(2025, 1, 1)) == 0
        assert months_between(date(2025, 1, 14), date(2026, 1, 1)) == 12
        assert months_between(date(2025, 11, 30), date(2026, 2, 1)) == 3

    def test_iter_inclusive(self):
        months = list(iter_calendar_months(date(2025, 11, 20), date(2026, 2, 3)))
        assert months == [(2025, 11), (2025, 12), (2026, 1), (2026, 2)]

    def test_iter_single_month(self):
        assert list(iter_calendar_months(date(2025, 3, 5), date(2025, 3, 9))) == [(2025, 3)]

    def test_clip_partial_first_month(self):
        window = clip_to_month(2025, 1, date(2025, 1, 14), date(2025, 4, 13))
        assert window == (date(2025, 1, 14), date(2025, 1, 31))

    def test_clip_full_month(self):
        window = clip_to_month(2025, 2, date(2025, 1, 14), date(2025, 4, 13))
        assert window == (date(2025, 2, 1), date(2025, 2, 28))

    def test_clip_outside_period(self):
        assert clip_to_month(2025, 5, date(2025, 1, 14), date(2025, 4, 13)) is None
