"""Session repository implementations."""

from .base import SessionNotFound, SessionRepository
from .json_store import JsonSessionStore

__all__ = ["JsonSessionStore", "SessionNotFound", "SessionRepository"]
