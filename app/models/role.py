"""ORM model for roles (ADMIN, STUDENT, ...)."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class Role(Base):
    """
    Named role granted to users through the users_roles association table.

    Created at seed time or by an administrator and not changed afterwards.
    """

    __tablename__ = "role"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"Role(id={self.id!r}, name={self.name!r})"
