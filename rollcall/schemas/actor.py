"""Actor: the authenticated principal every authorization decision is made for."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rollcall.schemas.permissions import PermissionId, Role, parse_permission_ids


class Actor(BaseModel):
    """
    Immutable snapshot of a user account as seen by the authorization core.

    permissions: explicit set stored on the account, or None for legacy accounts.
    An empty set is treated the same as None by the resolver.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    username: str = Field(..., min_length=1, max_length=255)
    full_name: str = ""
    role: Role = Role.STANDARD_USER
    permissions: frozenset[PermissionId] | None = None
    is_blocked: bool = False
    profile_picture_url: str | None = None
    password_hash: str | None = Field(default=None, exclude=True, repr=False)

    @field_validator("full_name", mode="before")
    @classmethod
    def coerce_full_name(cls, v: Any) -> str:
        return v or ""

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, v: Any) -> Role:
        """Accept legacy stored role names (mamdhoob, user)."""
        return Role(v)

    @field_validator("is_blocked", mode="before")
    @classmethod
    def coerce_is_blocked(cls, v: Any) -> bool:
        return bool(v)

    @field_validator("permissions", mode="before")
    @classmethod
    def drop_unknown_permissions(cls, v: Any) -> frozenset[PermissionId] | None:
        """Stored sets may hold identifiers that no longer exist; ignore those."""
        if v is None:
            return None
        return frozenset(parse_permission_ids(v))

    @property
    def has_explicit_permissions(self) -> bool:
        return bool(self.permissions)


class ActorPublic(BaseModel):
    """Actor as returned by the API (no credentials)."""

    id: int
    username: str
    full_name: str
    role: Role
    permissions: list[PermissionId] | None = None
    is_blocked: bool
    profile_picture_url: str | None = None

    class Config:
        from_attributes = True

    @classmethod
    def from_actor(cls, actor: Actor) -> "ActorPublic":
        return cls(
            id=actor.id,
            username=actor.username,
            full_name=actor.full_name,
            role=actor.role,
            permissions=sorted(actor.permissions) if actor.permissions is not None else None,
            is_blocked=actor.is_blocked,
            profile_picture_url=actor.profile_picture_url,
        )


class ActorsListResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[ActorPublic]


class PermissionAssignment(BaseModel):
    """Request for PUT /admin/users/{id}/permissions. null or [] returns the account to its role fallback."""

    permissions: list[PermissionId] | None = None


class PermissionReset(BaseModel):
    """Request for POST /admin/users/{id}/reset-permissions; role switches the account first."""

    role: Role | None = None


class AdminActionResponse(BaseModel):
    """Response for admin mutations. audit_degraded is set when the audit entry could not be written."""

    user: ActorPublic
    audit_degraded: bool = False
