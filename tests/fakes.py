"""In-memory stores and actor builders shared by the tests."""

from datetime import UTC, datetime

import bcrypt

from rollcall.core.exceptions import StoreUnavailable
from rollcall.schemas.actor import Actor
from rollcall.schemas.audit import AuditEntry, AuditEntryCreate
from rollcall.schemas.permissions import PermissionId, Role

# Low cost keeps the suite fast; verify_password accepts any cost.
_TEST_ROUNDS = 4


def hashed(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=_TEST_ROUNDS)).decode("utf-8")


def make_actor(
    actor_id: int = 1,
    username: str = "aishath",
    role: Role = Role.STANDARD_USER,
    permissions: set[PermissionId] | None = None,
    is_blocked: bool = False,
    password: str | None = None,
    full_name: str = "",
) -> Actor:
    """Build an Actor for tests."""
    return Actor(
        id=actor_id,
        username=username,
        full_name=full_name or username.title(),
        role=role,
        permissions=frozenset(permissions) if permissions is not None else None,
        is_blocked=is_blocked,
        password_hash=hashed(password) if password else None,
    )


class InMemoryActorStore:
    """ActorStore over a dict; records every block-flag write."""

    def __init__(self, *actors: Actor) -> None:
        self.actors: dict[int, Actor] = {a.id: a for a in actors}
        self.blocked_writes: list[tuple[int, bool]] = []
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StoreUnavailable("actor store offline")

    def fetch_actor(self, username: str) -> Actor | None:
        self._check()
        wanted = username.strip().lower()
        return next((a for a in self.actors.values() if a.username.lower() == wanted), None)

    def get_actor(self, actor_id: int) -> Actor | None:
        self._check()
        return self.actors.get(actor_id)

    def list_actors(self) -> list[Actor]:
        self._check()
        return [self.actors[k] for k in sorted(self.actors)]

    def persist_actor(self, actor: Actor) -> Actor:
        self._check()
        if actor.id not in self.actors:
            raise LookupError(f"User {actor.id} does not exist")
        self.actors[actor.id] = actor
        return actor

    def set_blocked_flag(self, actor_id: int, blocked: bool) -> Actor | None:
        self._check()
        self.blocked_writes.append((actor_id, blocked))
        actor = self.actors.get(actor_id)
        if actor is None:
            return None
        updated = actor.model_copy(update={"is_blocked": blocked})
        self.actors[actor_id] = updated
        return updated


class InMemoryAuditStore:
    """AuditStore over a list. Set fail to simulate an unreachable store."""

    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []
        self.fail = False

    def append_audit_entry(self, entry: AuditEntryCreate) -> AuditEntry:
        if self.fail:
            raise StoreUnavailable("audit store offline")
        saved = AuditEntry(
            id=len(self.entries) + 1,
            created_at=datetime.now(UTC),
            **entry.model_dump(),
        )
        self.entries.append(saved)
        return saved

    def list_audit_entries(self, limit: int) -> list[AuditEntry]:
        if self.fail:
            raise StoreUnavailable("audit store offline")
        return list(reversed(self.entries))[:limit]
