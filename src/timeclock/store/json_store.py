"""JSON-based session repository."""

import dataclasses
import json
import logging
import os
import tempfile
import uuid
from datetime import date
from pathlib import Path
from typing import Any

from ..errors import SessionClosed
from ..models import TimeclockConfig, WorkSession
from .base import SessionNotFound

logger = logging.getLogger(__name__)

IMMUTABLE_FIELDS = frozenset({"id", "date"})


class JsonSessionStore:
    """Session repository using one JSON file per day in .timeclock/sessions/."""

    def __init__(self, root_path: str | Path | None = None):
        """Initialize the store.

        Args:
            root_path: Root directory containing .timeclock/. Defaults to current directory.
        """
        self.root = Path(root_path) if root_path else Path.cwd()
        self.timeclock_dir = self.root / ".timeclock"
        self.sessions_dir = self.timeclock_dir / "sessions"
        self.config_file = self.timeclock_dir / "config.json"

    def ensure_initialized(self) -> None:
        """Ensure the .timeclock directory exists."""
        if not self.sessions_dir.exists():
            raise FileNotFoundError(
                f"Timeclock not initialized. Run 'timeclock init' in {self.root}"
            )

    def initialize(self) -> None:
        """Create the .timeclock directory with default files."""
        self.sessions_dir.mkdir(parents=True, exist_ok=True)

        if not self.config_file.exists():
            self._write_json(self.config_file, TimeclockConfig().to_dict())

    def _session_file(self, day: date) -> Path:
        """Get the session file path for a given day."""
        return self.sessions_dir / f"{day.isoformat()}.json"

    def _read_json(self, path: Path) -> dict[str, Any]:
        """Read and parse a JSON file."""
        if not path.exists():
            return {"sessions": []}
        with open(path) as f:
            return json.load(f)

    def _write_json(self, path: Path, data: dict[str, Any]) -> None:
        """Write data to JSON file atomically with sorted keys for git diffs."""
        fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=".tmp_", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.write("\n")
            os.replace(temp_path, path)
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise
        logger.debug("Wrote %s", path)

    def _stored_days(self) -> list[date]:
        """Days that have a session file, oldest first."""
        days = []
        for path in self.sessions_dir.glob("*.json"):
            try:
                days.append(date.fromisoformat(path.stem))
            except ValueError:
                logger.debug("Ignoring unexpected file %s", path)
        return sorted(days)

    def _load_day(self, day: date) -> list[WorkSession]:
        data = self._read_json(self._session_file(day))
        return [WorkSession.from_dict(s) for s in data.get("sessions", [])]

    def create(self, **fields: Any) -> WorkSession:
        """Persist a new session and return it with a generated ID."""
        self.ensure_initialized()

        session = WorkSession(id=uuid.uuid4().hex[:8], **fields)

        file_path = self._session_file(session.date)
        data = self._read_json(file_path)
        data["sessions"].append(session.to_dict())
        self._write_json(file_path, data)

        return session

    def update(self, session_id: str, **fields: Any) -> WorkSession:
        """Apply a partial update to an open session and return the new version."""
        self.ensure_initialized()

        frozen = IMMUTABLE_FIELDS.intersection(fields)
        if frozen:
            raise ValueError(f"Cannot update immutable fields: {', '.join(sorted(frozen))}")

        # Most updates close today's session, so search recent days first
        for day in reversed(self._stored_days()):
            file_path = self._session_file(day)
            data = self._read_json(file_path)
            for i, session_data in enumerate(data.get("sessions", [])):
                if session_data["id"] != session_id:
                    continue
                current = WorkSession.from_dict(session_data)
                if not current.is_active:
                    raise SessionClosed(f"Session {session_id} is already clocked out")
                updated = dataclasses.replace(current, **fields)
                data["sessions"][i] = updated.to_dict()
                self._write_json(file_path, data)
                return updated

        raise SessionNotFound(f"Session {session_id} not found")

    def get(self, session_id: str) -> WorkSession | None:
        """Get a specific session by ID."""
        self.ensure_initialized()
        for day in reversed(self._stored_days()):
            for session in self._load_day(day):
                if session.id == session_id:
                    return session
        return None

    def filter(
        self,
        *,
        day: date | None = None,
        start: date | None = None,
        end: date | None = None,
        is_active: bool | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[WorkSession]:
        """List sessions matching a day/range and active flag.

        Args:
            day: Only sessions recorded on this day.
            start: Earliest day of record (inclusive).
            end: Latest day of record (inclusive).
            is_active: Only open (True) or closed (False) sessions.
            order_by: Field name, prefixed with ``-`` for descending order.
                Defaults to date then start time ascending.
            limit: Maximum number of sessions returned after ordering.
        """
        self.ensure_initialized()

        if day is not None:
            days = [day]
        else:
            days = [
                d
                for d in self._stored_days()
                if (start is None or d >= start) and (end is None or d <= end)
            ]

        sessions: list[WorkSession] = []
        for d in days:
            sessions.extend(self._load_day(d))

        if is_active is not None:
            sessions = [s for s in sessions if s.is_active == is_active]

        sessions.sort(key=lambda s: (s.date, s.start_time))
        if order_by:
            field_name = order_by.lstrip("-")
            sessions.sort(
                key=lambda s: (getattr(s, field_name) is None, getattr(s, field_name)),
                reverse=order_by.startswith("-"),
            )

        if limit is not None:
            sessions = sessions[:limit]

        return sessions

    def get_config(self) -> TimeclockConfig:
        """Load the data directory configuration."""
        self.ensure_initialized()
        if not self.config_file.exists():
            return TimeclockConfig()
        return TimeclockConfig.from_dict(self._read_json(self.config_file))

    def save_config(self, config: TimeclockConfig) -> None:
        """Save the data directory configuration."""
        self._write_json(self.config_file, config.to_dict())
