"""Error taxonomy shared by the authorization core, its store adapters and the API."""


class RollcallError(Exception):
    """Base class for errors raised by the authorization core."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthenticationDenied(RollcallError):
    """Wrong credentials. Recoverable; carries the attempts left before lockout."""

    def __init__(self, message: str, remaining_attempts: int) -> None:
        self.remaining_attempts = remaining_attempts
        super().__init__(message)


class AccountBlocked(RollcallError):
    """The account is locked out until an authorized unblock."""


class PermissionDenied(RollcallError):
    """The actor lacks the permission required for the requested operation."""

    def __init__(self, message: str, permission_id: str | None = None) -> None:
        self.permission_id = permission_id
        super().__init__(message)


class AuditAppendDegraded(RollcallError):
    """The audit store did not accept an entry. Never rolls back the primary mutation."""


class StoreUnavailable(RollcallError):
    """An external store call failed for infrastructure reasons."""
