"""Periodic live-total refresh on the asyncio event loop."""

import asyncio
import logging
from typing import Callable

from .clock import ClockState, ClockStateMachine, LiveTotals

logger = logging.getLogger(__name__)


class LiveTicker:
    """Re-evaluate a machine's live totals on a fixed cadence.

    The timer is bound to the session that was open when it started. It
    stops by itself once that session is closed or replaced, and
    :meth:`follow` restarts it for a newly opened session.
    """

    def __init__(
        self,
        machine: ClockStateMachine,
        on_tick: Callable[[LiveTotals], None],
        interval: float = 1.0,
    ):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.machine = machine
        self.on_tick = on_tick
        self.interval = interval
        self._task: asyncio.Task | None = None
        self._session_id: str | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def session_id(self) -> str | None:
        """Id of the session the running timer computes against."""
        return self._session_id if self.running else None

    def _raise_failure(self) -> None:
        """Re-raise the error that ended the last timer, if any."""
        task = self._task
        if task is None or not task.done() or task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._task = None
            self._session_id = None
            raise error

    def start(self) -> bool:
        """Start ticking if a session is open. Returns whether a timer runs.

        Raises:
            InvalidInterval: If the previous timer died on a failed tick, such
                as a session that crossed midnight. Other tick errors are
                re-raised the same way.
        """
        self._raise_failure()
        if self.running:
            return True
        active = self.machine.active_session
        if active is None:
            return False
        self._session_id = active.id
        self._task = asyncio.get_running_loop().create_task(self._run(active.id))
        logger.debug("Ticker started for session %s", active.id)
        return True

    def stop(self) -> None:
        """Cancel the timer, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Ticker stopped for session %s", self._session_id)
        self._task = None
        self._session_id = None

    def follow(self) -> bool:
        """Align the timer with the machine's current state."""
        self._raise_failure()
        active = self.machine.active_session
        if active is None:
            self.stop()
            return False
        if self.running and self._session_id != active.id:
            self.stop()
        return self.start()

    async def _run(self, session_id: str) -> None:
        while True:
            active = self.machine.active_session
            if self.machine.state is not ClockState.SESSION_ACTIVE or active.id != session_id:
                logger.debug("Session %s no longer active, ticker exiting", session_id)
                return
            self.on_tick(self.machine.tick())
            await asyncio.sleep(self.interval)

    async def aclose(self) -> None:
        """Cancel the timer and wait for it to finish."""
        task = self._task
        self.stop()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def __aenter__(self) -> "LiveTicker":
        self.start()
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
