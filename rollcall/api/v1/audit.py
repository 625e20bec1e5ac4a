"""Audit log read view."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from rollcall.api.v1.auth import get_audit_logger, require_permission, to_http_exception
from rollcall.core.config import get_settings
from rollcall.core.exceptions import StoreUnavailable
from rollcall.schemas.actor import Actor
from rollcall.schemas.audit import AuditLogResponse
from rollcall.schemas.permissions import PermissionId
from rollcall.services.audit import AuditLogger

router = APIRouter()


@router.get("/", response_model=AuditLogResponse)
def list_audit_entries(
    _actor: Annotated[Actor, Depends(require_permission(PermissionId.VIEW_AUDIT_LOGS))],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
    limit: Annotated[int | None, Query(ge=1, le=1000)] = None,
    search: Annotated[str | None, Query(max_length=255)] = None,
) -> AuditLogResponse:
    """Newest entries first; search matches action, details or performer name."""
    try:
        entries = audit.recent(limit or get_settings().AUDIT_LOG_DEFAULT_LIMIT, search)
    except StoreUnavailable as e:
        raise to_http_exception(e) from e
    return AuditLogResponse(entries=entries)
