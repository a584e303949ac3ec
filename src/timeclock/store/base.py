"""Session repository protocol consumed by the engine."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional, Protocol, Sequence

from ..models import WorkSession


class SessionNotFound(LookupError):
    """Raised when an update targets an unknown session id."""


class SessionRepository(Protocol):
    def create(self, **fields: Any) -> WorkSession:
        """Persist a new session and return it with its assigned id."""

        raise NotImplementedError

    def update(self, session_id: str, **fields: Any) -> WorkSession:
        """Apply a partial update to an open session and return the new version.

        Raises:
            SessionNotFound: If no session has ``session_id``.
            SessionClosed: If the stored session is no longer active.
        """

        raise NotImplementedError

    def filter(
        self,
        *,
        day: Optional[date] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        is_active: Optional[bool] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Sequence[WorkSession]:
        """Sessions on ``day`` or within ``start``..``end``, both inclusive.

        ``order_by`` names a session field, prefixed with ``-`` for
        descending order.
        """

        raise NotImplementedError
