"""Store interfaces consumed by the authorization core, and their SQLAlchemy implementations.

The core only sees the Protocols. SQLAlchemy failures are converted to
StoreUnavailable here so callers never handle driver exceptions.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.core.exceptions import StoreUnavailable
from rollcall.core.security import normalize_username
from rollcall.models import AuditLog, User
from rollcall.schemas.actor import Actor
from rollcall.schemas.audit import AuditEntry, AuditEntryCreate

logger = logging.getLogger(__name__)


class ActorStore(Protocol):
    def fetch_actor(self, username: str) -> Actor | None: ...

    def get_actor(self, actor_id: int) -> Actor | None: ...

    def list_actors(self) -> list[Actor]: ...

    def persist_actor(self, actor: Actor) -> Actor: ...

    def set_blocked_flag(self, actor_id: int, blocked: bool) -> Actor | None: ...


class AuditStore(Protocol):
    def append_audit_entry(self, entry: AuditEntryCreate) -> AuditEntry: ...

    def list_audit_entries(self, limit: int) -> list[AuditEntry]: ...


@contextmanager
def _store_errors(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise database failures as StoreUnavailable."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Store operation %s failed: %s", operation, e)
        raise StoreUnavailable(f"{operation} failed: {e.__class__.__name__}") from e


def _to_actor(user: User) -> Actor:
    return Actor.model_validate(user)


class SqlActorStore:
    """ActorStore backed by the users table."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def fetch_actor(self, username: str) -> Actor | None:
        """Look up by username, case-insensitively."""
        with _store_errors(self.db, "fetch_actor"):
            user = (
                self.db.query(User)
                .filter(func.lower(User.username) == normalize_username(username))
                .first()
            )
        return _to_actor(user) if user is not None else None

    def get_actor(self, actor_id: int) -> Actor | None:
        with _store_errors(self.db, "get_actor"):
            user = self.db.query(User).filter(User.id == actor_id).first()
        return _to_actor(user) if user is not None else None

    def list_actors(self) -> list[Actor]:
        with _store_errors(self.db, "list_actors"):
            users = self.db.query(User).order_by(User.id).all()
        return [_to_actor(u) for u in users]

    def persist_actor(self, actor: Actor) -> Actor:
        """Write role, profile, permission set and block flag back to an existing row."""
        with _store_errors(self.db, "persist_actor"):
            user = self.db.query(User).filter(User.id == actor.id).first()
            if user is None:
                raise LookupError(f"User {actor.id} does not exist")
            user.full_name = actor.full_name
            user.role = actor.role.value
            user.permissions = (
                sorted(p.value for p in actor.permissions)
                if actor.permissions is not None
                else None
            )
            user.is_blocked = actor.is_blocked
            user.profile_picture_url = actor.profile_picture_url
            self.db.commit()
            self.db.refresh(user)
        return _to_actor(user)

    def set_blocked_flag(self, actor_id: int, blocked: bool) -> Actor | None:
        """Set is_blocked; returns None when no such user exists."""
        with _store_errors(self.db, "set_blocked_flag"):
            user = self.db.query(User).filter(User.id == actor_id).first()
            if user is None:
                return None
            user.is_blocked = blocked
            self.db.commit()
            self.db.refresh(user)
        return _to_actor(user)


class SqlAuditStore:
    """AuditStore backed by the audit_logs table. Insert and read only."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def append_audit_entry(self, entry: AuditEntryCreate) -> AuditEntry:
        with _store_errors(self.db, "append_audit_entry"):
            row = AuditLog(
                action=entry.action,
                details=entry.details,
                performed_by=entry.performed_by,
                performed_by_name=entry.performed_by_name,
            )
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return AuditEntry.model_validate(row)

    def list_audit_entries(self, limit: int) -> list[AuditEntry]:
        """Newest first."""
        with _store_errors(self.db, "list_audit_entries"):
            rows = (
                self.db.query(AuditLog)
                .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
                .limit(limit)
                .all()
            )
        return [AuditEntry.model_validate(r) for r in rows]
