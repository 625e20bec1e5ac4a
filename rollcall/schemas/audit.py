"""Schemas for audit log entries and the audit read view."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Action tags written by the core.
ACTION_SECURITY_LOCKOUT = "security_lockout"
ACTION_ADMIN_BLOCK = "admin_block"
ACTION_ADMIN_UNBLOCK = "admin_unblock"
ACTION_UPDATE_USER = "update_user"


class AuditEntryCreate(BaseModel):
    """Entry handed to the audit store. The store assigns id and timestamp."""

    model_config = ConfigDict(frozen=True)

    action: str = Field(..., min_length=1, max_length=64)
    details: str = ""
    performed_by: str = Field(..., min_length=1)
    performed_by_name: str | None = None


class AuditEntry(BaseModel):
    """Immutable, persisted audit log entry."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    action: str
    details: str
    performed_by: str
    performed_by_name: str | None = None
    created_at: datetime


class AuditLogResponse(BaseModel):
    """Response for GET /audit."""

    entries: list[AuditEntry]
