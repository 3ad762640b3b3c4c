"""Session data kept for resumption, and stores for it."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    """Data needed to resume a session."""

    id: bytes
    secret: bytes


class SessionStore(ABC):
    """Storage of sessions for resumption.

    Clients key sessions by server name, servers by session id.
    """

    @abstractmethod
    def set(self, key: bytes, session: Session) -> None:
        """Save a session under ``key``."""

    @abstractmethod
    def get(self, key: bytes) -> Session:
        """Fetch the session saved under ``key``; raise KeyError if absent."""

    @abstractmethod
    def delete(self, key: bytes) -> None:
        """Remove the session saved under ``key``, if any."""


class MemorySessionStore(SessionStore):
    """A session store held in a dictionary."""

    def __init__(self) -> None:
        self._sessions: dict[bytes, Session] = {}

    def set(self, key: bytes, session: Session) -> None:
        self._sessions[bytes(key)] = session

    def get(self, key: bytes) -> Session:
        return self._sessions[bytes(key)]

    def delete(self, key: bytes) -> None:
        self._sessions.pop(bytes(key), None)