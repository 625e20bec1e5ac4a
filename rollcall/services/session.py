"""Client sessions: the signed-in actor and the session-scoped login attempt counters.

A SessionStore is opened for a client, handed to the lockout guard (its
counters) and to request handlers (its actor id), and torn down at logout.
The registry is process-local; sessions do not survive a restart.
"""

import secrets
import threading
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import lru_cache

from rollcall.schemas.actor import Actor
from rollcall.services.lockout import LoginAttemptStore


@dataclass
class SessionStore:
    id: str
    attempts: LoginAttemptStore = field(default_factory=LoginAttemptStore)
    actor_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_authenticated(self) -> bool:
        return self.actor_id is not None

    def sign_in(self, actor: Actor) -> None:
        self.actor_id = actor.id

    def sign_out(self) -> None:
        self.actor_id = None


class SessionRegistry:
    """Session id -> SessionStore, safe for concurrent requests."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, SessionStore] = {}

    def open(self) -> SessionStore:
        session = SessionStore(id=secrets.token_urlsafe(32))
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get(self, session_id: str | None) -> SessionStore | None:
        if not session_id:
            return None
        with self._lock:
            return self._sessions.get(session_id)

    def get_or_open(self, session_id: str | None) -> SessionStore:
        """Existing session for this id, or a fresh one when the id is missing or unknown."""
        return self.get(session_id) or self.open()

    def close(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


@lru_cache
def get_session_registry() -> SessionRegistry:
    """Process-wide registry (safe to call from dependencies)."""
    return SessionRegistry()
