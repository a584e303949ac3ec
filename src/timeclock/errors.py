"""Exceptions raised by Timeclock."""


class TimeclockError(Exception):
    """Base exception for time-accounting errors."""

    pass


class InvalidInterval(TimeclockError):
    """End time precedes start time, or the interval crosses midnight."""

    pass


class AlreadyActive(TimeclockError):
    """Clock-in attempted while a session is already open for the day."""

    def __init__(self, session):
        self.session = session
        super().__init__(
            f"Session {session.id} is already active since "
            f"{session.start_time.strftime('%H:%M:%S')} on {session.date.isoformat()}"
        )


class NoActiveSession(TimeclockError):
    """Clock-out attempted with no open session."""

    pass


class DivisionUndefined(TimeclockError):
    """Daily average requested for a range with no worked days."""

    pass


class SessionClosed(TimeclockError):
    """Update attempted on a session that was already clocked out."""

    pass
