"""Work session model for Timeclock."""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any


@dataclass
class WorkSession:
    """One clock-in to clock-out interval on a day of record."""

    id: str
    date: date
    start_time: time
    end_time: time | None = None
    is_active: bool = True
    regular_hours: float = 0.0
    extra_hours: float = 0.0
    total_hours: float = 0.0
    work_description: str | None = None
    user_name: str | None = None

    def start_datetime(self) -> datetime:
        """Combine the day of record with the start time."""
        return datetime.combine(self.date, self.start_time)

    def end_datetime(self) -> datetime | None:
        """Combine the day of record with the end time, if closed."""
        if self.end_time is None:
            return None
        return datetime.combine(self.date, self.end_time)

    def to_dict(self) -> dict[str, Any]:
        """Convert session to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "start_time": self.start_time.isoformat(timespec="seconds"),
            "end_time": (
                self.end_time.isoformat(timespec="seconds") if self.end_time else None
            ),
            "is_active": self.is_active,
            "regular_hours": self.regular_hours,
            "extra_hours": self.extra_hours,
            "total_hours": self.total_hours,
            "work_description": self.work_description,
            "user_name": self.user_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkSession":
        """Create a WorkSession from a dictionary."""
        end_time = data.get("end_time")
        return cls(
            id=data["id"],
            date=date.fromisoformat(data["date"]),
            start_time=time.fromisoformat(data["start_time"]),
            end_time=time.fromisoformat(end_time) if end_time else None,
            is_active=data.get("is_active", False),
            regular_hours=data.get("regular_hours", 0.0),
            extra_hours=data.get("extra_hours", 0.0),
            total_hours=data.get("total_hours", 0.0),
            work_description=data.get("work_description"),
            user_name=data.get("user_name"),
        )

    def time_span(self) -> str:
        """Format the session's clock times as ``HH:MM - HH:MM``."""
        start = self.start_time.strftime("%H:%M")
        end = self.end_time.strftime("%H:%M") if self.end_time else "--:--"
        return f"{start} - {end}"
