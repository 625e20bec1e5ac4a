"""Pydantic domain values and request/response schemas."""

from rollcall.schemas.actor import Actor, ActorPublic, ActorsListResponse
from rollcall.schemas.audit import AuditEntry, AuditEntryCreate, AuditLogResponse
from rollcall.schemas.auth import (
    LoginAttempt,
    LoginOutcome,
    LoginRequest,
    LoginResponse,
    LoginResult,
    SessionInfo,
)
from rollcall.schemas.health import HealthResponse
from rollcall.schemas.permissions import Namespace, PermissionId, Role
from rollcall.schemas.voter_form import FieldState, FormMode, VoterField, VoterForm

__all__ = [
    "Actor",
    "ActorPublic",
    "ActorsListResponse",
    "AuditEntry",
    "AuditEntryCreate",
    "AuditLogResponse",
    "FieldState",
    "FormMode",
    "HealthResponse",
    "LoginAttempt",
    "LoginOutcome",
    "LoginRequest",
    "LoginResponse",
    "LoginResult",
    "Namespace",
    "PermissionId",
    "Role",
    "SessionInfo",
    "VoterField",
    "VoterForm",
]
