"""Bootstrap data: roles and the demo admin/student accounts."""

import logging

from app.core.security import hash_password
from app.models import Role, User
from app.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)

ADMIN_ROLE = "ADMIN"
STUDENT_ROLE = "STUDENT"

# (username, password, email, roles)
DEMO_USERS = (
    ("admin", "admin", "admin@example.com", (ADMIN_ROLE,)),
    ("student", "student", "student@example.com", (STUDENT_ROLE,)),
)


def create_user(
    store: IdentityStore,
    username: str,
    password: str,
    roles: tuple[str, ...] | list[str] = (),
    email: str | None = None,
) -> User:
    """
    Create (or update) a user with a freshly hashed password and attach roles, creating missing ones.

    Status flags are left unset: new accounts get the column defaults (all true) and an
    existing account keeps whatever lock/disable state an administrator gave it.
    """
    user = store.save(User(username=username, password_hash=hash_password(password), email=email))
    for name in roles:
        role = store.save(Role(name=name))
        store.assign_role(user, role)
    return user


def seed_demo_data(store: IdentityStore) -> int:
    """
    Create the ADMIN/STUDENT roles and the demo users if missing.

    Existing demo users are left untouched. Returns the number of users created.
    """
    for name in (ADMIN_ROLE, STUDENT_ROLE):
        store.save(Role(name=name))
    created = 0
    for username, password, email, roles in DEMO_USERS:
        if store.find_user_by_username(username) is not None:
            continue
        create_user(store, username, password, roles, email=email)
        created += 1
    if created:
        logger.info("Seeded demo users: created=%s", created)
    return created
