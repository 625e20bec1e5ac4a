"""ORM model for application users (actors of the authorization core)."""

from sqlalchemy import Boolean, Column, Integer, String

from rollcall.models.base import Base, JSONVariant


class User(Base):
    """
    User account: credentials, role, optional explicit permission set and block flag.

    role: superadmin | admin | candidate | proxy-officer | standard-user
    permissions: list of permission identifiers; NULL or [] means "use role fallback".
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False, default="")
    role = Column(String(32), nullable=False, default="standard-user")
    permissions = Column(JSONVariant, nullable=True)
    is_blocked = Column(Boolean, nullable=False, default=False)
    profile_picture_url = Column(String(2048), nullable=True)
