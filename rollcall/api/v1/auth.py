"""Login/logout and auth dependencies (get_session, get_current_actor, require_permission)."""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from rollcall.core.config import get_settings
from rollcall.core.database import get_db
from rollcall.core.exceptions import (
    AccountBlocked,
    AuthenticationDenied,
    PermissionDenied,
    RollcallError,
    StoreUnavailable,
)
from rollcall.schemas.actor import Actor, ActorPublic
from rollcall.schemas.auth import LoginOutcome, LoginRequest, LoginResponse, SessionInfo
from rollcall.schemas.permissions import Namespace, PermissionId
from rollcall.services.audit import AuditLogger
from rollcall.services.lockout import LockoutGuard
from rollcall.services.resolver import is_allowed, visible_ids
from rollcall.services.session import SessionRegistry, SessionStore, get_session_registry
from rollcall.services.stores import ActorStore, SqlActorStore, SqlAuditStore

logger = logging.getLogger(__name__)
router = APIRouter()

SESSION_HEADER = "X-Session-Id"
BLOCKED_MESSAGE = "User is blocked by security reasons."


def to_http_exception(e: RollcallError, session_id: str | None = None) -> HTTPException:
    """Map the core's error taxonomy to HTTP status codes."""
    headers = {SESSION_HEADER: session_id} if session_id else None
    if isinstance(e, AuthenticationDenied):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": e.message, "remaining_attempts": e.remaining_attempts},
            headers=headers,
        )
    if isinstance(e, AccountBlocked):
        return HTTPException(status_code=status.HTTP_423_LOCKED, detail=e.message, headers=headers)
    if isinstance(e, PermissionDenied):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    if isinstance(e, StoreUnavailable):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=e.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


def get_actor_store(db: Annotated[Session, Depends(get_db)]) -> ActorStore:
    return SqlActorStore(db)


def get_audit_logger(db: Annotated[Session, Depends(get_db)]) -> AuditLogger:
    return AuditLogger(SqlAuditStore(db))


def get_session(
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    x_session_id: Annotated[str | None, Header()] = None,
) -> SessionStore:
    """Dependency: the signed-in client session named by X-Session-Id. Raises 401 otherwise."""
    session = registry.get(x_session_id)
    if session is None or not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session


def get_current_actor(
    session: Annotated[SessionStore, Depends(get_session)],
    actor_store: Annotated[ActorStore, Depends(get_actor_store)],
) -> Actor:
    """
    Dependency: reload the session's actor so role, permission and block changes apply
    immediately. A blocked or deleted account is signed out.
    """
    try:
        actor = actor_store.get_actor(session.actor_id)
    except StoreUnavailable as e:
        raise to_http_exception(e) from e
    if actor is None:
        session.sign_out()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    if actor.is_blocked:
        session.sign_out()
        raise to_http_exception(AccountBlocked(BLOCKED_MESSAGE))
    return actor


def require_permission(permission_id: PermissionId) -> Callable[..., Actor]:
    """Dependency factory: require the current actor to hold permission_id. Raises 403 otherwise."""

    def dependency(actor: Annotated[Actor, Depends(get_current_actor)]) -> Actor:
        if not is_allowed(actor, permission_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission '{permission_id.value}' required",
            )
        return actor

    return dependency


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    actor_store: Annotated[ActorStore, Depends(get_actor_store)],
    audit: Annotated[AuditLogger, Depends(get_audit_logger)],
    x_session_id: Annotated[str | None, Header()] = None,
) -> LoginResponse:
    """
    Authenticate with username and password inside a client session.

    The session id is returned on every outcome (header X-Session-Id) so failed
    attempts keep counting against the same session. Three consecutive failures
    block an existing account until an administrator unblocks it.
    """
    settings = get_settings()
    session = registry.get_or_open(x_session_id)
    guard = LockoutGuard(
        session.attempts,
        actor_store,
        audit,
        max_attempts=settings.LOCKOUT_MAX_ATTEMPTS,
        system_actor_name=settings.SYSTEM_SECURITY_NAME,
    )
    try:
        result = guard.attempt_login(body.username, body.password, actor_store.fetch_actor)
    except StoreUnavailable as e:
        raise to_http_exception(e) from e

    if result.outcome == LoginOutcome.BLOCKED:
        if result.persisted_block:
            message = BLOCKED_MESSAGE
        else:
            message = (
                f"You have entered the wrong password {settings.LOCKOUT_MAX_ATTEMPTS} times. "
                "Your account has been blocked for security reasons."
            )
        raise to_http_exception(AccountBlocked(message), session.id)
    if result.outcome == LoginOutcome.INVALID_CREDENTIALS:
        remaining = result.remaining_attempts or 0
        raise to_http_exception(
            AuthenticationDenied(f"Invalid credentials. {remaining} attempts remaining.", remaining),
            session.id,
        )

    session.sign_in(result.actor)
    logger.info("Login succeeded: username=%s session=%s", result.actor.username, session.id[:8])
    return LoginResponse(session_id=session.id, actor=ActorPublic.from_actor(result.actor))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    x_session_id: Annotated[str | None, Header()] = None,
) -> None:
    """Tear down the client session (actor and attempt counters). Idempotent."""
    if x_session_id:
        registry.close(x_session_id)


@router.get("/me", response_model=SessionInfo)
def me(
    session: Annotated[SessionStore, Depends(get_session)],
    actor: Annotated[Actor, Depends(get_current_actor)],
) -> SessionInfo:
    """Current actor plus the menu entries and metric tiles it may see."""
    return SessionInfo(
        session_id=session.id,
        actor=ActorPublic.from_actor(actor),
        menu=[p.value for p in visible_ids(actor, Namespace.MENU_VISIBILITY)],
        metrics=[p.value for p in visible_ids(actor, Namespace.METRIC_VISIBILITY)],
    )
