"""ORM models for user accounts and their role assignments."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table, true

from app.models.base import Base

# Sole owner of the user <-> role relationship; neither model holds a collection of the other.
users_roles = Table(
    "users_roles",
    Base.metadata,
    Column("userId", Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True),
    Column("roleId", Integer, ForeignKey("role.id", ondelete="RESTRICT"), primary_key=True),
)


class User(Base):
    """
    User account for login and role-based access control.

    Roles are looked up through users_roles at resolution time (see IdentityStore).
    Accounts are deactivated with enabled=False, never deleted.
    """

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column("password", String(255), nullable=False)
    email = Column(String(255), nullable=True)
    credentials_non_expired = Column(Boolean, nullable=False, default=True, server_default=true())
    account_non_locked = Column(Boolean, nullable=False, default=True, server_default=true())
    account_non_expired = Column(Boolean, nullable=False, default=True, server_default=true())
    enabled = Column("active", Boolean, nullable=False, default=True, server_default=true())

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r}, enabled={self.enabled!r})"
