"""Calendar windows used by history and report views."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator


class Period(Enum):
    """Reporting window sizes."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class DateRange:
    """An inclusive range of calendar days."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)

    def title(self, period: Period) -> str:
        """Human-readable heading for the range."""
        if period is Period.DAY:
            return f"Day: {self.start.strftime('%A')} {self.start.day} {self.start.strftime('%B %Y')}"
        if period is Period.WEEK:
            return (
                f"Week: {self.start.day} {self.start.strftime('%b')}"
                f" - {self.end.day} {self.end.strftime('%b %Y')}"
            )
        if period is Period.MONTH:
            return f"Month: {self.start.strftime('%B %Y')}"
        return f"Year: {self.start.year}"


def _add_months(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def shift(period: Period, anchor: date, steps: int) -> date:
    """Move ``anchor`` by whole periods (negative steps go back)."""
    if period is Period.DAY:
        return anchor + timedelta(days=steps)
    if period is Period.WEEK:
        return anchor + timedelta(weeks=steps)
    if period is Period.MONTH:
        return _add_months(anchor, steps)
    return _add_months(anchor, steps * 12)


def period_range(period: Period, anchor: date, offset: int = 0) -> DateRange:
    """The window of ``period`` containing ``anchor``, ``offset`` periods back.

    Weeks start on Monday.
    """
    if offset:
        anchor = shift(period, anchor, -offset)

    if period is Period.DAY:
        return DateRange(anchor, anchor)
    if period is Period.WEEK:
        monday = anchor - timedelta(days=anchor.weekday())
        return DateRange(monday, monday + timedelta(days=6))
    if period is Period.MONTH:
        last_day = calendar.monthrange(anchor.year, anchor.month)[1]
        return DateRange(anchor.replace(day=1), anchor.replace(day=last_day))
    return DateRange(date(anchor.year, 1, 1), date(anchor.year, 12, 31))
