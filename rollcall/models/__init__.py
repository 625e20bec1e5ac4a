"""SQLAlchemy ORM models."""

from rollcall.models.audit import AuditLog
from rollcall.models.base import Base
from rollcall.models.user import User

__all__ = ["AuditLog", "Base", "User"]
