"""User administration: list accounts, block/unblock, assign or reset permissions."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from rollcall.api.v1.auth import (
    get_actor_store,
    get_audit_logger,
    get_current_actor,
    to_http_exception,
)
from rollcall.core.exceptions import PermissionDenied, StoreUnavailable
from rollcall.schemas.actor import (
    Actor,
    ActorPublic,
    ActorsListResponse,
    AdminActionResponse,
    PermissionAssignment,
    PermissionReset,
)
from rollcall.services import admin as admin_service
from rollcall.services.audit import AuditLogger
from rollcall.services.stores import ActorStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _to_response(result: admin_service.AdminActionResult) -> AdminActionResponse:
    return AdminActionResponse(user=ActorPublic.from_actor(result.actor), audit_degraded=result.audit_degraded)


def _run(action: Callable[..., admin_service.AdminActionResult], *args: object) -> AdminActionResponse:
    try:
        return _to_response(action(*args))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except PermissionDenied as e:
        logger.warning("Admin action %s refused: %s", action.__name__, e.message)
        raise to_http_exception(e) from e
    except StoreUnavailable as e:
        logger.error("Admin action %s failed: %s", action.__name__, e.message)
        raise to_http_exception(e) from e


def get_superuser(actor: Annotated[Actor, Depends(get_current_actor)]) -> Actor:
    """Dependency: the current actor, if it may administer accounts. Raises 403 otherwise."""
    try:
        admin_service.require_superuser(actor)
    except PermissionDenied as e:
        raise to_http_exception(e) from e
    return actor


@router.get("/users", response_model=ActorsListResponse)
def list_users(
    _actor: Annotated[Actor, Depends(get_superuser)],
    actor_store: Annotated[ActorStore, Depends(get_actor_store)],
) -> ActorsListResponse:
    try:
        actors = actor_store.list_actors()
    except StoreUnavailable as e:
        raise to_http_exception(e) from e
    return ActorsListResponse(users=[ActorPublic.from_actor(a) for a in actors])


@router.post("/users/{user_id}/block", response_model=AdminActionResponse)
def block_user(
    user_id: int,
    actor: Annotated[Actor, Depends(get_current_actor)],
    actor_store: Annotated[ActorStore, Depends(get_actor_store)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> AdminActionResponse:
    return _run(admin_service.block_actor, actor, user_id, actor_store, audit)


@router.post("/users/{user_id}/unblock", response_model=AdminActionResponse)
def unblock_user(
    user_id: int,
    actor: Annotated[Actor, Depends(get_current_actor)],
    actor_store: Annotated[ActorStore, Depends(get_actor_store)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> AdminActionResponse:
    """Clear a lockout or administrative block."""
    return _run(admin_service.unblock_actor, actor, user_id, actor_store, audit)


@router.put("/users/{user_id}/permissions", response_model=AdminActionResponse)
def assign_user_permissions(
    user_id: int,
    body: PermissionAssignment,
    actor: Annotated[Actor, Depends(get_current_actor)],
    actor_store: Annotated[ActorStore, Depends(get_actor_store)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> AdminActionResponse:
    """Replace the account's explicit permission set. Role defaults are not merged in."""
    return _run(admin_service.assign_permissions, actor, user_id, body.permissions, actor_store, audit)


@router.post("/users/{user_id}/reset-permissions", response_model=AdminActionResponse)
def reset_user_permissions(
    user_id: int,
    body: PermissionReset,
    actor: Annotated[Actor, Depends(get_current_actor)],
    actor_store: Annotated[ActorStore, Depends(get_actor_store)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
) -> AdminActionResponse:
    """Seed the explicit set from role defaults (optionally switching role first)."""
    return _run(admin_service.reset_to_role_defaults, actor, user_id, actor_store, audit, body.role)
