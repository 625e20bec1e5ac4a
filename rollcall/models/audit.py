"""ORM model for append-only audit log entries."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from rollcall.models.base import Base


class AuditLog(Base):
    """
    One privileged action. Rows are inserted, never updated or deleted.

    performed_by is not a foreign key: entries must outlive deleted users and
    the lockout guard writes entries for a synthetic actor with no user row.
    """

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(64), nullable=False, index=True)
    details = Column(Text, nullable=False, default="")
    performed_by = Column(String(64), nullable=False)
    performed_by_name = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
