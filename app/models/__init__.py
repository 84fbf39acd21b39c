"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.role import Role
from app.models.user import User, users_roles

__all__ = ["Base", "Role", "User", "users_roles"]
