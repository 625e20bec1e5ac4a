"""Login lockout: block an account after consecutive failed password attempts.

Per-username states: clear -> warned(1) -> warned(2) -> blocked (with the default
threshold of 3). Counters are keyed by username, not account id, so unknown
usernames are counted too and the caller cannot tell valid usernames apart by
the response. Only existing accounts are blocked server-side; for an unknown
username the counter alone suppresses further attempts in this session.

The persisted block flag on the account is authoritative; the counters live in
the client session and are never consulted to unblock anyone.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rollcall.core.security import normalize_username, verify_password
from rollcall.schemas.actor import Actor
from rollcall.schemas.audit import ACTION_SECURITY_LOCKOUT
from rollcall.schemas.auth import LoginAttempt, LoginOutcome, LoginResult
from rollcall.services.audit import AuditLogger, system_security_actor

if TYPE_CHECKING:
    from rollcall.services.stores import ActorStore

logger = logging.getLogger(__name__)

ActorLookup = Callable[[str], Actor | None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LoginAttemptStore:
    """Username -> failed-attempt counter. Increments are serialized by a lock."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._lock = threading.Lock()
        self._attempts: dict[str, LoginAttempt] = {}
        self._clock = clock

    def get(self, username: str) -> LoginAttempt | None:
        with self._lock:
            return self._attempts.get(normalize_username(username))

    def count(self, username: str) -> int:
        attempt = self.get(username)
        return attempt.count if attempt else 0

    def increment(self, username: str) -> int:
        """Record one more failure and return the new count."""
        key = normalize_username(username)
        with self._lock:
            current = self._attempts.get(key)
            new_count = (current.count if current else 0) + 1
            self._attempts[key] = LoginAttempt(count=new_count, last_attempt_at=self._clock())
            return new_count

    def clear(self, username: str) -> None:
        with self._lock:
            self._attempts.pop(normalize_username(username), None)


class LockoutGuard:
    """Wraps the login entry point with the block-after-N-failures policy."""

    def __init__(
        self,
        attempts: LoginAttemptStore,
        actor_store: ActorStore,
        audit: AuditLogger,
        max_attempts: int = 3,
        system_actor_name: str = "System Security",
    ) -> None:
        self.attempts = attempts
        self.actor_store = actor_store
        self.audit = audit
        self.max_attempts = max_attempts
        self.system_actor = system_security_actor(system_actor_name)

    def attempt_login(self, username: str, password: str, lookup: ActorLookup) -> LoginResult:
        """
        Authenticate one attempt.

        - persisted block flag set: blocked, counter untouched
        - unknown username already at the threshold: blocked (session scope only)
        - correct password: success, counter cleared
        - wrong password: counter incremented; reaching the threshold blocks an
          existing account and writes a security_lockout audit entry (once, even
          when failures race past the threshold)

        StoreUnavailable from lookup or from persisting the block flag propagates.
        """
        actor = lookup(username)

        if actor is not None and actor.is_blocked:
            logger.info("Login rejected for blocked account: username=%s", actor.username)
            return LoginResult(outcome=LoginOutcome.BLOCKED, remaining_attempts=0, persisted_block=True)

        if actor is None and self.attempts.count(username) >= self.max_attempts:
            return LoginResult(outcome=LoginOutcome.BLOCKED, remaining_attempts=0)

        if actor is not None and verify_password(password, actor.password_hash):
            self.attempts.clear(username)
            return LoginResult(outcome=LoginOutcome.SUCCESS, actor=actor)

        count = self.attempts.increment(username)
        if count < self.max_attempts:
            return LoginResult(
                outcome=LoginOutcome.INVALID_CREDENTIALS,
                remaining_attempts=self.max_attempts - count,
            )

        # Only the attempt that reaches the threshold persists the block and audits it;
        # concurrent failures past it are rejected without side effects.
        if actor is None or count > self.max_attempts:
            return LoginResult(outcome=LoginOutcome.BLOCKED, remaining_attempts=0)

        self.actor_store.set_blocked_flag(actor.id, True)
        logger.warning(
            "Account locked after %s failed login attempts: username=%s id=%s",
            count,
            actor.username,
            actor.id,
        )
        result = self.audit.record(
            ACTION_SECURITY_LOCKOUT,
            f"Account '{actor.username}' blocked due to {count} failed login attempts.",
            self.system_actor,
        )
        return LoginResult(
            outcome=LoginOutcome.BLOCKED,
            remaining_attempts=0,
            audit_degraded=result.degraded,
        )
