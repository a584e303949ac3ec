"""Hour arithmetic on wall-clock timestamps."""

import math
from datetime import datetime

from ..errors import InvalidInterval

SECONDS_PER_HOUR = 3600.0


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed time between two timestamps of the same day, in hours.

    Raises:
        InvalidInterval: If ``end`` precedes ``start`` or the two timestamps
            fall on different calendar days.
    """
    if end < start:
        raise InvalidInterval(
            f"End {end.isoformat()} precedes start {start.isoformat()}"
        )
    if end.date() != start.date():
        raise InvalidInterval(
            f"Interval {start.isoformat()} - {end.isoformat()} crosses midnight"
        )
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def format_hours(hours: float) -> str:
    """Format fractional hours as ``"Hh Mm"``, rounding to the nearest minute."""
    if hours < 0:
        raise ValueError(f"Cannot format negative hours: {hours}")
    h = math.floor(hours)
    m = round((hours - h) * 60)
    if m == 60:
        h, m = h + 1, 0
    return f"{h}h {m}m"
