"""Tests for calendar windows."""

from datetime import date

from timeclock.engine import DateRange, Period, period_range, shift


class TestPeriodRange:
    """Tests for period_range."""

    def test_day(self):
        assert period_range(Period.DAY, date(2025, 10, 8)) == DateRange(
            date(2025, 10, 8), date(2025, 10, 8)
        )

    def test_week_starts_monday(self):
        date_range = period_range(Period.WEEK, date(2025, 10, 8))

        assert date_range.start == date(2025, 10, 6)
        assert date_range.end == date(2025, 10, 12)

    def test_week_on_sunday(self):
        date_range = period_range(Period.WEEK, date(2025, 10, 12))

        assert date_range.start == date(2025, 10, 6)

    def test_weeks_ago(self):
        date_range = period_range(Period.WEEK, date(2025, 10, 8), offset=2)

        assert date_range == DateRange(date(2025, 9, 22), date(2025, 9, 28))

    def test_month(self):
        date_range = period_range(Period.MONTH, date(2024, 2, 14))

        assert date_range == DateRange(date(2024, 2, 1), date(2024, 2, 29))

    def test_months_ago_across_year(self):
        date_range = period_range(Period.MONTH, date(2025, 1, 31), offset=2)

        assert date_range == DateRange(date(2024, 11, 1), date(2024, 11, 30))

    def test_year(self):
        date_range = period_range(Period.YEAR, date(2025, 6, 1), offset=1)

        assert date_range == DateRange(date(2024, 1, 1), date(2024, 12, 31))


class TestShift:
    """Tests for shift."""

    def test_month_clamps_day(self):
        assert shift(Period.MONTH, date(2025, 3, 31), -1) == date(2025, 2, 28)

    def test_forward_and_back(self):
        anchor = date(2025, 10, 8)

        assert shift(Period.DAY, anchor, 1) == date(2025, 10, 9)
        assert shift(Period.WEEK, anchor, -1) == date(2025, 10, 1)
        assert shift(Period.YEAR, date(2024, 2, 29), 1) == date(2025, 2, 28)


class TestDateRange:
    """Tests for DateRange helpers."""

    def test_contains_and_days(self):
        date_range = DateRange(date(2025, 10, 6), date(2025, 10, 8))

        assert date_range.contains(date(2025, 10, 8))
        assert not date_range.contains(date(2025, 10, 9))
        assert list(date_range.days()) == [
            date(2025, 10, 6),
            date(2025, 10, 7),
            date(2025, 10, 8),
        ]

    def test_titles(self):
        week = period_range(Period.WEEK, date(2025, 10, 8))
        month = period_range(Period.MONTH, date(2025, 10, 8))
        year = period_range(Period.YEAR, date(2025, 10, 8))
        day = period_range(Period.DAY, date(2025, 10, 6))

        assert week.title(Period.WEEK) == "Week: 6 Oct - 12 Oct 2025"
        assert month.title(Period.MONTH) == "Month: October 2025"
        assert year.title(Period.YEAR) == "Year: 2025"
        assert day.title(Period.DAY) == "Day: Monday 6 October 2025"
