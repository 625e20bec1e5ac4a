"""Permission resolution: may this actor use this permission identifier?

Evaluation order (first match wins):
  1. superadmin role, or the bootstrap username (case-insensitive) -> allow
  2. the own-profile permission -> allow
  3. non-empty explicit set on the account -> allow iff the identifier is in it
     (authoritative: role defaults are NOT merged in)
  4. no explicit set -> admin gets the full catalog; other roles use the legacy fallback
  5. deny

All functions here are pure queries.
"""

from rollcall.core.config import settings
from rollcall.schemas.actor import Actor
from rollcall.schemas.permissions import Namespace, PermissionId, Role
from rollcall.services.catalog import all_ids, ids_in, legacy_fallback_for


def is_bootstrap_account(actor: Actor, bootstrap_username: str | None = None) -> bool:
    bootstrap = (bootstrap_username or settings.BOOTSTRAP_USERNAME).strip().lower()
    return actor.username.strip().lower() == bootstrap


def is_superuser(actor: Actor, bootstrap_username: str | None = None) -> bool:
    """True for superadmin-role actors and for the bootstrap account whatever its stored role."""
    return actor.role == Role.SUPERADMIN or is_bootstrap_account(actor, bootstrap_username)


def is_allowed(
    actor: Actor,
    permission_id: PermissionId,
    bootstrap_username: str | None = None,
) -> bool:
    """Return True if the actor holds the permission."""
    if is_superuser(actor, bootstrap_username):
        return True
    if permission_id == PermissionId.OWN_PROFILE:
        return True
    if actor.permissions:
        return permission_id in actor.permissions
    if actor.role == Role.ADMIN:
        return True
    return permission_id in legacy_fallback_for(actor.role)


def effective_permissions(
    actor: Actor,
    bootstrap_username: str | None = None,
) -> frozenset[PermissionId]:
    """Every catalog identifier the actor is allowed."""
    return frozenset(
        pid for pid in all_ids() if is_allowed(actor, pid, bootstrap_username)
    )


def visible_ids(
    actor: Actor,
    namespace: Namespace,
    bootstrap_username: str | None = None,
) -> list[PermissionId]:
    """Allowed identifiers of one namespace in catalog order (menu entries, metric tiles)."""
    return [pid for pid in ids_in(namespace) if is_allowed(actor, pid, bootstrap_username)]
