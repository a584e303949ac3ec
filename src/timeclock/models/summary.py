"""Aggregated views over closed work sessions."""

from dataclasses import dataclass, field
from datetime import date

from ..errors import DivisionUndefined
from .session import WorkSession


@dataclass(frozen=True)
class DaySummary:
    """Closed sessions of one worked day, ordered by start time."""

    date: date
    sessions: tuple[WorkSession, ...]
    regular_hours: float
    extra_hours: float
    total_hours: float


@dataclass(frozen=True)
class PeriodSummary:
    """Totals for a date range, grouped by day."""

    start: date
    end: date
    total_regular: float = 0.0
    total_extra: float = 0.0
    total_hours: float = 0.0
    days: tuple[DaySummary, ...] = field(default_factory=tuple)

    @property
    def worked_days(self) -> int:
        return len(self.days)

    @property
    def daily_average(self) -> float:
        """Average hours per worked day.

        Raises:
            DivisionUndefined: If no day in the range has a closed session.
        """
        if self.worked_days == 0:
            raise DivisionUndefined(
                f"No worked days between {self.start.isoformat()} and {self.end.isoformat()}"
            )
        return self.total_hours / self.worked_days

    def days_ascending(self) -> list[DaySummary]:
        """Days oldest first, as used in report text."""
        return sorted(self.days, key=lambda d: d.date)

    def days_descending(self) -> list[DaySummary]:
        """Days most recent first, as used in history views."""
        return sorted(self.days, key=lambda d: d.date, reverse=True)
