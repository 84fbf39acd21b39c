"""Resolve a username into a Principal with its authority set."""

from app.schemas.principal import Principal
from app.services.identity_store import IdentityStore

ROLE_PREFIX = "ROLE_"


class IdentityNotFound(Exception):
    """No user exists for the requested username."""

    def __init__(self, username: str) -> None:
        super().__init__(f"User not found with name: {username}")
        self.username = username


def role_authority(role_name: str) -> str:
    """Authority token for a role name, e.g. ADMIN -> ROLE_ADMIN."""
    return f"{ROLE_PREFIX}{role_name}"


def resolve(store: IdentityStore, username: str) -> Principal:
    """
    Build a Principal for username from the store.

    Authorities are derived from the user's roles on every call. Passwords are not checked here.
    Raises IdentityNotFound if the username is unknown.
    """
    user = store.find_user_by_username(username)
    if user is None:
        raise IdentityNotFound(username)
    roles = store.find_roles_for_user(user)
    return Principal(
        username=user.username,
        password_hash=user.password_hash,
        enabled=user.enabled,
        account_non_expired=user.account_non_expired,
        account_non_locked=user.account_non_locked,
        credentials_non_expired=user.credentials_non_expired,
        authorities=frozenset(role_authority(role.name) for role in roles),
    )
