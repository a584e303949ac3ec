"""Tests for period aggregation."""

import random
from datetime import date, time

import pytest

from timeclock.engine import DivisionUndefined, aggregate, summarize_day
from timeclock.models import WorkSession


def closed(
    session_id: str,
    day: date,
    start: time,
    end: time,
    regular: float,
    extra: float = 0.0,
    description: str | None = None,
) -> WorkSession:
    """Helper to create a closed session for testing."""
    return WorkSession(
        id=session_id,
        date=day,
        start_time=start,
        end_time=end,
        is_active=False,
        regular_hours=regular,
        extra_hours=extra,
        total_hours=regular + extra,
        work_description=description,
    )


@pytest.fixture
def week_sessions() -> list[WorkSession]:
    """Three worked days in the week of 2025-10-06, 25h in total."""
    return [
        closed("a", date(2025, 10, 6), time(8), time(14), 6.0),
        closed("b", date(2025, 10, 6), time(15), time(18), 2.0, 1.0),
        closed("c", date(2025, 10, 8), time(9), time(17), 8.0),
        closed("d", date(2025, 10, 10), time(7), time(15), 8.0),
    ]


class TestAggregate:
    """Tests for aggregate."""

    def test_week_totals(self, week_sessions):
        summary = aggregate(week_sessions, date(2025, 10, 6), date(2025, 10, 12))

        assert summary.total_regular == 24.0
        assert summary.total_extra == 1.0
        assert summary.total_hours == 25.0
        assert summary.worked_days == 3
        assert summary.daily_average == pytest.approx(8.333, abs=1e-3)

    def test_range_is_inclusive(self, week_sessions):
        summary = aggregate(week_sessions, date(2025, 10, 8), date(2025, 10, 10))

        assert [d.date for d in summary.days] == [date(2025, 10, 8), date(2025, 10, 10)]
        assert summary.total_hours == 16.0

    def test_sessions_outside_range_ignored(self, week_sessions):
        other = closed("z", date(2025, 10, 13), time(8), time(12), 4.0)

        summary = aggregate(week_sessions + [other], date(2025, 10, 6), date(2025, 10, 12))

        assert summary.total_hours == 25.0

    def test_active_sessions_ignored(self, week_sessions):
        open_session = WorkSession(id="x", date=date(2025, 10, 9), start_time=time(9))

        summary = aggregate(week_sessions + [open_session], date(2025, 10, 6), date(2025, 10, 12))

        assert summary.worked_days == 3

    def test_empty_range(self, week_sessions):
        summary = aggregate(week_sessions, date(2025, 11, 1), date(2025, 11, 30))

        assert summary.total_regular == 0.0
        assert summary.total_extra == 0.0
        assert summary.total_hours == 0.0
        assert summary.worked_days == 0
        with pytest.raises(DivisionUndefined):
            summary.daily_average

    def test_inverted_range_rejected(self, week_sessions):
        with pytest.raises(ValueError):
            aggregate(week_sessions, date(2025, 10, 12), date(2025, 10, 6))

    def test_grouping_and_ordering(self, week_sessions):
        summary = aggregate(
            list(reversed(week_sessions)), date(2025, 10, 6), date(2025, 10, 12)
        )

        monday = summary.days_ascending()[0]
        assert monday.date == date(2025, 10, 6)
        assert [s.id for s in monday.sessions] == ["a", "b"]
        assert monday.regular_hours == 8.0
        assert monday.extra_hours == 1.0
        assert monday.total_hours == 9.0

        assert [d.date for d in summary.days_descending()] == [
            date(2025, 10, 10),
            date(2025, 10, 8),
            date(2025, 10, 6),
        ]

    def test_independent_of_input_order(self, week_sessions):
        expected = aggregate(week_sessions, date(2025, 10, 1), date(2025, 10, 31))
        shuffled = list(week_sessions)
        random.Random(7).shuffle(shuffled)

        assert aggregate(shuffled, date(2025, 10, 1), date(2025, 10, 31)) == expected


class TestSummarizeDay:
    """Tests for summarize_day."""

    def test_only_closed_sessions_of_the_day(self, week_sessions):
        open_session = WorkSession(id="x", date=date(2025, 10, 6), start_time=time(19))

        day = summarize_day(date(2025, 10, 6), week_sessions + [open_session])

        assert [s.id for s in day.sessions] == ["a", "b"]
        assert day.total_hours == 9.0

    def test_empty_day(self):
        day = summarize_day(date(2025, 10, 7), [])

        assert day.sessions == ()
        assert day.total_hours == 0.0
