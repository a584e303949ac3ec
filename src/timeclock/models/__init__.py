"""Data models for Timeclock."""

from .session import WorkSession
from .summary import DaySummary, PeriodSummary
from .config import TimeclockConfig

__all__ = [
    "WorkSession",
    "DaySummary",
    "PeriodSummary",
    "TimeclockConfig",
]
