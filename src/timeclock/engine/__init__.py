"""Time-accounting engine: duration math, overtime split, clock state, rollups."""

from ..errors import (
    TimeclockError,
    InvalidInterval,
    AlreadyActive,
    NoActiveSession,
    DivisionUndefined,
    SessionClosed,
)
from .duration import hours_between, format_hours
from .overtime import split
from .clock import ClockState, ClockStateMachine, LiveTotals
from .ticker import LiveTicker
from .aggregator import aggregate, summarize_day
from .periods import DateRange, Period, period_range, shift

__all__ = [
    "TimeclockError",
    "InvalidInterval",
    "AlreadyActive",
    "NoActiveSession",
    "DivisionUndefined",
    "SessionClosed",
    "hours_between",
    "format_hours",
    "split",
    "ClockState",
    "ClockStateMachine",
    "LiveTotals",
    "LiveTicker",
    "aggregate",
    "summarize_day",
    "DateRange",
    "Period",
    "period_range",
    "shift",
]
