"""Clock-in/clock-out state machine for a single day."""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable

from ..errors import AlreadyActive, InvalidInterval, NoActiveSession, SessionClosed
from ..models import WorkSession
from ..store.base import SessionRepository
from .duration import hours_between
from .overtime import DEFAULT_THRESHOLD, split

logger = logging.getLogger(__name__)


class ClockState(Enum):
    """Whether a session is open for the day."""

    NO_ACTIVE_SESSION = "no_active_session"
    SESSION_ACTIVE = "session_active"


@dataclass(frozen=True)
class LiveTotals:
    """Display values for the day at a given instant.

    ``live_regular``/``live_extra`` cover only the open session and are zero
    when none is open; ``day_regular``/``day_extra`` include closed sessions.
    """

    state: ClockState
    session_id: str | None
    live_regular: float
    live_extra: float
    day_regular: float
    day_extra: float

    @property
    def day_total(self) -> float:
        return self.day_regular + self.day_extra


class ClockStateMachine:
    """Governs the sessions of one day of record.

    The machine holds the day's closed sessions and, if any, its open
    session, loaded from the repository by :meth:`refresh`. Every operation
    takes ``now`` once and never samples the clock again.
    """

    def __init__(
        self,
        repository: SessionRepository,
        day: date | None = None,
        threshold: float = DEFAULT_THRESHOLD,
        user_name: str | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.threshold = threshold
        self.user_name = user_name
        self._clock = clock
        self.day = day if day is not None else clock().date()
        self.closed_sessions: list[WorkSession] = []
        self.active_session: WorkSession | None = None
        self.refresh()

    def refresh(self) -> None:
        """Reload the day's sessions from the repository."""
        sessions = self.repository.filter(day=self.day, order_by="start_time")
        active = [s for s in sessions if s.is_active]
        if len(active) > 1:
            logger.warning(
                "%d active sessions on %s, using %s",
                len(active),
                self.day.isoformat(),
                active[0].id,
            )
        self.closed_sessions = [s for s in sessions if not s.is_active]
        self.active_session = active[0] if active else None

    @property
    def state(self) -> ClockState:
        if self.active_session is None:
            return ClockState.NO_ACTIVE_SESSION
        return ClockState.SESSION_ACTIVE

    def _sample(self, now: datetime | None) -> datetime:
        return now if now is not None else self._clock()

    def closed_regular(self) -> float:
        """Regular hours accounted by the day's closed sessions."""
        return math.fsum(s.regular_hours for s in self.closed_sessions)

    def closed_extra(self) -> float:
        """Extra hours accounted by the day's closed sessions."""
        return math.fsum(s.extra_hours for s in self.closed_sessions)

    def _split_open_session(self, now: datetime) -> tuple[float, float, float]:
        elapsed = hours_between(self.active_session.start_datetime(), now)
        regular, extra = split(self.closed_regular(), elapsed, self.threshold)
        return elapsed, regular, extra

    def clock_in(self, now: datetime | None = None) -> WorkSession:
        """Open a new session starting at ``now``.

        Raises:
            AlreadyActive: If a session is already open for the day.
            InvalidInterval: If ``now`` is not on the machine's day.
        """
        now = self._sample(now).replace(microsecond=0)
        if self.active_session is not None:
            raise AlreadyActive(self.active_session)
        if now.date() != self.day:
            raise InvalidInterval(
                f"Cannot clock in at {now.isoformat()} for day {self.day.isoformat()}"
            )

        session = self.repository.create(
            date=self.day,
            start_time=now.time(),
            is_active=True,
            regular_hours=0.0,
            extra_hours=0.0,
            total_hours=0.0,
            user_name=self.user_name,
        )
        self.active_session = session
        logger.info("Clocked in session %s at %s", session.id, now.isoformat())
        return session

    def tick(self, now: datetime | None = None) -> LiveTotals:
        """Compute live totals without persisting anything."""
        closed_regular = self.closed_regular()
        closed_extra = self.closed_extra()

        if self.active_session is None:
            return LiveTotals(
                state=ClockState.NO_ACTIVE_SESSION,
                session_id=None,
                live_regular=0.0,
                live_extra=0.0,
                day_regular=closed_regular,
                day_extra=closed_extra,
            )

        now = self._sample(now).replace(microsecond=0)
        _, regular, extra = self._split_open_session(now)
        return LiveTotals(
            state=ClockState.SESSION_ACTIVE,
            session_id=self.active_session.id,
            live_regular=regular,
            live_extra=extra,
            day_regular=closed_regular + regular,
            day_extra=closed_extra + extra,
        )

    def clock_out(
        self, work_description: str, now: datetime | None = None
    ) -> WorkSession:
        """Close the open session at ``now`` and persist its split.

        Raises:
            NoActiveSession: If no session is open for the day, or the open
                session was already clocked out through another machine.
            InvalidInterval: If ``now`` precedes the start or is on another day.
        """
        if self.active_session is None:
            raise NoActiveSession(f"No active session on {self.day.isoformat()}")
        if work_description is None:
            raise ValueError("work_description is required (may be empty)")

        now = self._sample(now).replace(microsecond=0)
        elapsed, regular, extra = self._split_open_session(now)

        try:
            session = self.repository.update(
                self.active_session.id,
                end_time=now.time(),
                is_active=False,
                total_hours=elapsed,
                regular_hours=regular,
                extra_hours=extra,
                work_description=work_description,
            )
        except SessionClosed as e:
            # Closed elsewhere since the last refresh
            self.refresh()
            raise NoActiveSession(str(e)) from e
        self.closed_sessions.append(session)
        self.active_session = None
        logger.info(
            "Clocked out session %s: %.4fh (regular %.4fh, extra %.4fh)",
            session.id,
            elapsed,
            regular,
            extra,
        )
        return session
