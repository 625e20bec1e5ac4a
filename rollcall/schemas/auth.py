"""Request/response schemas for login, lockout outcomes and sessions."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from rollcall.schemas.actor import Actor, ActorPublic


class LoginOutcome(StrEnum):
    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    BLOCKED = "blocked"


class LoginAttempt(BaseModel):
    """Failed-login counter for one username within one client session."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(..., ge=0)
    last_attempt_at: datetime


class LoginResult(BaseModel):
    """Outcome of LockoutGuard.attempt_login."""

    model_config = ConfigDict(frozen=True)

    outcome: LoginOutcome
    remaining_attempts: int | None = None
    actor: Actor | None = None
    audit_degraded: bool = False
    # True when rejected by the block flag stored on the account, not by this session's counter.
    persisted_block: bool = False


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginResponse(BaseModel):
    """Successful login: the actor and the server-side session to send back as X-Session-Id."""

    session_id: str
    actor: ActorPublic


class SessionInfo(BaseModel):
    """Response for GET /auth/me."""

    session_id: str
    actor: ActorPublic
    menu: list[str]
    metrics: list[str]
