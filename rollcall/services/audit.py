"""Audit trail: best-effort append of one entry per privileged mutation.

A failed append never raises and never undoes the mutation that triggered it.
The caller gets a degraded result to surface as a soft warning; the failure is
also logged here. No retries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from rollcall.core.exceptions import AuditAppendDegraded, StoreUnavailable
from rollcall.schemas.actor import Actor
from rollcall.schemas.audit import AuditEntry, AuditEntryCreate

if TYPE_CHECKING:
    from rollcall.services.stores import AuditStore

logger = logging.getLogger(__name__)

SYSTEM_SECURITY_ACTOR_ID = "system-security"


@dataclass(frozen=True)
class SystemActor:
    """Synthetic author for entries no user account can author (e.g. its own lockout)."""

    id: str
    full_name: str


@dataclass(frozen=True)
class AuditRecordResult:
    entry: AuditEntry | None = None
    error: AuditAppendDegraded | None = None

    @property
    def recorded(self) -> bool:
        return self.entry is not None

    @property
    def degraded(self) -> bool:
        return self.error is not None


def system_security_actor(display_name: str) -> SystemActor:
    return SystemActor(id=SYSTEM_SECURITY_ACTOR_ID, full_name=display_name)


class AuditLogger:
    """Appends entries to an AuditStore and serves the read view."""

    def __init__(self, store: AuditStore) -> None:
        self.store = store

    def record(self, action: str, details: str, actor: Actor | SystemActor) -> AuditRecordResult:
        performed_by = str(actor.id)
        try:
            entry = AuditEntryCreate(
                action=action,
                details=details,
                performed_by=performed_by,
                performed_by_name=actor.full_name or getattr(actor, "username", None),
            )
            saved = self.store.append_audit_entry(entry)
        except (StoreUnavailable, ValidationError) as e:
            logger.warning("Audit append degraded: action=%s performed_by=%s error=%s", action, performed_by, e)
            return AuditRecordResult(error=AuditAppendDegraded(f"Audit entry for '{action}' was not recorded: {e}"))
        return AuditRecordResult(entry=saved)

    def recent(self, limit: int, search: str | None = None) -> list[AuditEntry]:
        """
        Newest entries first, optionally filtered by a case-insensitive substring of
        action, details or performer name. Store failures propagate (StoreUnavailable).
        """
        entries = self.store.list_audit_entries(limit)
        if not search or not search.strip():
            return entries
        needle = search.strip().lower()
        return [
            e
            for e in entries
            if needle in e.action.lower()
            or needle in e.details.lower()
            or (e.performed_by_name is not None and needle in e.performed_by_name.lower())
        ]
