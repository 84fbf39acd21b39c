"""Identity store: lookups and upserts of users, roles and their association."""

import logging

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from app.models import Role, User, users_roles

logger = logging.getLogger(__name__)

# Account-status columns an administrator may change.
ACCOUNT_STATUS_FLAGS = (
    "enabled",
    "account_non_locked",
    "account_non_expired",
    "credentials_non_expired",
)

_USER_UPSERT_FIELDS = ("password_hash", "email") + ACCOUNT_STATUS_FLAGS


class IdentityStore:
    """
    Read and write access to User and Role records over one SQLAlchemy session.

    No caching: every lookup is a query. Lookups are exact and case-sensitive.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_user_by_username(self, username: str) -> User | None:
        return self.session.execute(
            select(User).where(User.username == username)
        ).scalar_one_or_none()

    def find_role_by_name(self, name: str) -> Role | None:
        return self.session.execute(
            select(Role).where(Role.name == name)
        ).scalar_one_or_none()

    def find_roles_for_user(self, user: User) -> list[Role]:
        """Roles assigned to the user, read from the users_roles association table."""
        stmt = (
            select(Role)
            .join(users_roles, users_roles.c.roleId == Role.id)
            .where(users_roles.c.userId == user.id)
            .order_by(Role.id)
        )
        return list(self.session.execute(stmt).scalars())

    def list_users(self) -> list[User]:
        return list(self.session.execute(select(User).order_by(User.id)).scalars())

    def save(self, entity: User | Role) -> User | Role:
        """
        Idempotent upsert keyed by username (User) or name (Role).

        Returns the persisted instance, which may differ from the one passed in.
        """
        if isinstance(entity, Role):
            return self._save_role(entity)
        if isinstance(entity, User):
            return self._save_user(entity)
        raise TypeError(f"Cannot save {type(entity).__name__}")

    def _save_role(self, role: Role) -> Role:
        if not role.name or not role.name.strip():
            raise ValueError("Role name must be non-empty")
        existing = self.find_role_by_name(role.name)
        if existing is not None:
            return existing
        self.session.add(role)
        self.session.commit()
        logger.info("Created role name=%s", role.name)
        return role

    def _save_user(self, user: User) -> User:
        if not user.username or not user.username.strip():
            raise ValueError("Username must be non-empty")
        existing = self.find_user_by_username(user.username)
        if existing is None:
            self.session.add(user)
            self.session.commit()
            logger.info("Created user username=%s", user.username)
            return user
        for field in _USER_UPSERT_FIELDS:
            value = getattr(user, field)
            if value is not None:
                setattr(existing, field, value)
        self.session.commit()
        return existing

    def assign_role(self, user: User, role: Role) -> bool:
        """Link user and role; returns False if the pair already existed."""
        exists = self.session.execute(
            select(users_roles.c.userId).where(
                users_roles.c.userId == user.id,
                users_roles.c.roleId == role.id,
            )
        ).first()
        if exists is not None:
            return False
        self.session.execute(insert(users_roles).values(userId=user.id, roleId=role.id))
        self.session.commit()
        return True

    def update_account_status(self, username: str, **flags: bool) -> bool:
        """
        Set account-status flags for one user in a single UPDATE statement.

        Returns False when no user has that username.
        """
        unknown = set(flags) - set(ACCOUNT_STATUS_FLAGS)
        if unknown:
            raise ValueError(f"Unknown account status flag(s): {', '.join(sorted(unknown))}")
        if not flags:
            raise ValueError("At least one account status flag is required")
        updated = (
            self.session.query(User)
            .filter(User.username == username)
            .update(
                {getattr(User, name): value for name, value in flags.items()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        if updated:
            logger.info("Account status updated: username=%s flags=%s", username, flags)
        return updated > 0
