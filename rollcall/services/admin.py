"""Administrative actions on user accounts: block, unblock, assign or reset permissions.

Only superusers (superadmin role or the bootstrap account) may administer
accounts; an admin narrowed by an explicit set can therefore never widen it
again. Refusals happen before any mutation. Each action appends its own audit
entry after the mutation succeeds.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rollcall.core.exceptions import PermissionDenied
from rollcall.schemas.actor import Actor
from rollcall.schemas.audit import ACTION_ADMIN_BLOCK, ACTION_ADMIN_UNBLOCK, ACTION_UPDATE_USER
from rollcall.schemas.permissions import PermissionId, Role
from rollcall.services.audit import AuditLogger
from rollcall.services.catalog import defaults_for
from rollcall.services.resolver import is_bootstrap_account, is_superuser

if TYPE_CHECKING:
    from rollcall.services.stores import ActorStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminActionResult:
    actor: Actor
    audit_degraded: bool = False


def require_superuser(performer: Actor) -> None:
    if not is_superuser(performer):
        raise PermissionDenied("Only a superadmin can manage user accounts.")


def _refuse_protected_target(performer: Actor, target: Actor, verb: str) -> None:
    if target.id == performer.id:
        raise PermissionDenied(f"You cannot {verb} your own account.")
    if is_bootstrap_account(target):
        raise PermissionDenied(f"You cannot {verb} the bootstrap account.")


def _load_target(actor_store: ActorStore, target_id: int) -> Actor:
    target = actor_store.get_actor(target_id)
    if target is None:
        raise LookupError(f"User {target_id} not found")
    return target


def block_actor(
    performer: Actor,
    target_id: int,
    actor_store: ActorStore,
    audit: AuditLogger,
) -> AdminActionResult:
    """Set the persisted block flag. The bootstrap account and the performer's own account are refused."""
    require_superuser(performer)
    target = _load_target(actor_store, target_id)
    _refuse_protected_target(performer, target, "block")

    updated = actor_store.set_blocked_flag(target.id, True) or target
    logger.info("Account blocked by %s: username=%s", performer.username, target.username)
    result = audit.record(ACTION_ADMIN_BLOCK, f"Blocked account: {target.username}", performer)
    return AdminActionResult(actor=updated, audit_degraded=result.degraded)


def unblock_actor(
    performer: Actor,
    target_id: int,
    actor_store: ActorStore,
    audit: AuditLogger,
) -> AdminActionResult:
    """Clear the persisted block flag set by a lockout or by an administrator."""
    require_superuser(performer)
    target = _load_target(actor_store, target_id)

    updated = actor_store.set_blocked_flag(target.id, False) or target
    logger.info("Account unblocked by %s: username=%s", performer.username, target.username)
    result = audit.record(ACTION_ADMIN_UNBLOCK, f"Unblocked account: {target.username}", performer)
    return AdminActionResult(actor=updated, audit_degraded=result.degraded)


def assign_permissions(
    performer: Actor,
    target_id: int,
    permissions: Iterable[PermissionId] | None,
    actor_store: ActorStore,
    audit: AuditLogger,
) -> AdminActionResult:
    """
    Store an explicit permission set on the account; it replaces role defaults entirely.

    None (or an empty set) removes the explicit set and returns the account to
    the legacy per-role fallback.
    """
    require_superuser(performer)
    target = _load_target(actor_store, target_id)
    _refuse_protected_target(performer, target, "change permissions of")

    explicit = frozenset(permissions) if permissions else None
    updated = actor_store.persist_actor(target.model_copy(update={"permissions": explicit}))
    summary = f"{len(explicit)} permissions" if explicit else "role fallback"
    result = audit.record(
        ACTION_UPDATE_USER,
        f"Updated permissions for: {target.username} ({summary})",
        performer,
    )
    return AdminActionResult(actor=updated, audit_degraded=result.degraded)


def reset_to_role_defaults(
    performer: Actor,
    target_id: int,
    actor_store: ActorStore,
    audit: AuditLogger,
    role: Role | None = None,
) -> AdminActionResult:
    """Seed the explicit set from the role defaults, optionally switching the role first."""
    require_superuser(performer)
    target = _load_target(actor_store, target_id)
    _refuse_protected_target(performer, target, "reset permissions of")

    new_role = role or target.role
    updated = actor_store.persist_actor(
        target.model_copy(update={"role": new_role, "permissions": frozenset(defaults_for(new_role))})
    )
    result = audit.record(
        ACTION_UPDATE_USER,
        f"Reset permissions for: {target.username} to {new_role.value} defaults",
        performer,
    )
    return AdminActionResult(actor=updated, audit_degraded=result.degraded)
