"""Regular/extra split of a worked interval against a daily threshold."""

from ..errors import InvalidInterval

DEFAULT_THRESHOLD = 8.0


def split(
    prior_regular_hours: float,
    interval_hours: float,
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[float, float]:
    """Split an interval into its regular and extra parts.

    The threshold applies to the day's cumulative regular hours, so an
    interval that starts once the threshold is exhausted is entirely extra
    and one that straddles it is split at the boundary.

    Args:
        prior_regular_hours: Regular hours already accounted today.
        interval_hours: Duration of the new interval.
        threshold: Daily regular-hour threshold.

    Returns:
        ``(regular, extra)`` summing to ``interval_hours``.
    """
    if interval_hours < 0:
        raise InvalidInterval(f"Negative interval: {interval_hours}h")

    remaining = max(threshold - prior_regular_hours, 0.0)
    regular = min(remaining, interval_hours)
    extra = interval_hours - regular
    return regular, extra
