"""Read-only permission queries: catalog, role defaults, the caller's effective set."""

from typing import Annotated

from fastapi import APIRouter, Depends

from rollcall.api.v1.auth import get_current_actor
from rollcall.schemas.actor import Actor
from rollcall.schemas.permissions import (
    CatalogResponse,
    EffectivePermissionsResponse,
    Namespace,
    PermissionCheckResponse,
    PermissionId,
    PermissionItem,
    Role,
    RoleDefaultsResponse,
)
from rollcall.services.catalog import defaults_for, ids_in, label_for, legacy_fallback_for
from rollcall.services.resolver import effective_permissions, is_allowed, is_superuser

router = APIRouter()


@router.get("/catalog", response_model=CatalogResponse)
def get_catalog(
    _actor: Annotated[Actor, Depends(get_current_actor)],
) -> CatalogResponse:
    """Every permission identifier, grouped by namespace in display order."""
    return CatalogResponse(
        namespaces={
            ns: [PermissionItem(id=pid, label=label_for(pid), namespace=ns) for pid in ids_in(ns)]
            for ns in Namespace
        }
    )


@router.get("/roles/{role}", response_model=RoleDefaultsResponse)
def get_role_defaults(
    role: Role,
    _actor: Annotated[Actor, Depends(get_current_actor)],
) -> RoleDefaultsResponse:
    """Suggested defaults for seeding a new account of this role, plus its legacy fallback."""
    fallback = legacy_fallback_for(role)
    return RoleDefaultsResponse(
        role=role,
        defaults=list(defaults_for(role)),
        legacy_fallback=sorted(fallback),
    )


@router.get("/me", response_model=EffectivePermissionsResponse)
def get_my_permissions(
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> EffectivePermissionsResponse:
    return EffectivePermissionsResponse(
        role=actor.role,
        is_superuser=is_superuser(actor),
        has_explicit_permissions=actor.has_explicit_permissions,
        permissions=sorted(effective_permissions(actor)),
    )


@router.get("/check/{permission_id}", response_model=PermissionCheckResponse)
def check_permission(
    permission_id: PermissionId,
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> PermissionCheckResponse:
    return PermissionCheckResponse(permission_id=permission_id, allowed=is_allowed(actor, permission_id))
