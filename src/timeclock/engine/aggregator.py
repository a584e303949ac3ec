"""Roll closed sessions up into period totals."""

import math
from collections import defaultdict
from datetime import date
from typing import Iterable

from ..models import DaySummary, PeriodSummary, WorkSession


def summarize_day(day: date, sessions: Iterable[WorkSession]) -> DaySummary:
    """Totals for the closed sessions of one day, ordered by start time."""
    closed = sorted(
        (s for s in sessions if not s.is_active and s.date == day),
        key=lambda s: (s.start_time, s.id),
    )
    return DaySummary(
        date=day,
        sessions=tuple(closed),
        regular_hours=math.fsum(s.regular_hours for s in closed),
        extra_hours=math.fsum(s.extra_hours for s in closed),
        total_hours=math.fsum(s.total_hours for s in closed),
    )


def aggregate(
    sessions: Iterable[WorkSession], start: date, end: date
) -> PeriodSummary:
    """Aggregate closed sessions recorded within ``[start, end]``.

    Active sessions are skipped. The result does not depend on the order of
    ``sessions``.
    """
    if end < start:
        raise ValueError(f"Range end {end.isoformat()} precedes start {start.isoformat()}")

    by_date: dict[date, list[WorkSession]] = defaultdict(list)
    for session in sessions:
        if session.is_active or not (start <= session.date <= end):
            continue
        by_date[session.date].append(session)

    days = tuple(summarize_day(day, by_date[day]) for day in sorted(by_date))
    return PeriodSummary(
        start=start,
        end=end,
        total_regular=math.fsum(d.regular_hours for d in days),
        total_extra=math.fsum(d.extra_hours for d in days),
        total_hours=math.fsum(d.total_hours for d in days),
        days=days,
    )
