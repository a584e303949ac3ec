"""Configuration model for Timeclock."""

from dataclasses import dataclass
from typing import Any

DEFAULT_THRESHOLD_HOURS = 8.0
DEFAULT_TICK_SECONDS = 1.0


@dataclass
class TimeclockConfig:
    """Timeclock data directory configuration."""

    version: str = "0.1"
    daily_threshold_hours: float = DEFAULT_THRESHOLD_HOURS
    tick_interval_seconds: float = DEFAULT_TICK_SECONDS
    user_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for JSON serialization."""
        return {
            "version": self.version,
            "daily_threshold_hours": self.daily_threshold_hours,
            "tick_interval_seconds": self.tick_interval_seconds,
            "user_name": self.user_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimeclockConfig":
        """Create a TimeclockConfig from a dictionary."""
        return cls(
            version=data.get("version", "0.1"),
            daily_threshold_hours=float(
                data.get("daily_threshold_hours", DEFAULT_THRESHOLD_HOURS)
            ),
            tick_interval_seconds=float(
                data.get("tick_interval_seconds", DEFAULT_TICK_SECONDS)
            ),
            user_name=data.get("user_name"),
        )
