"""Username/password authentication on top of the identity resolver."""

import logging
from functools import lru_cache

from app.core.security import hash_password, verify_password
from app.schemas.principal import Principal
from app.services.identity_resolver import IdentityNotFound, resolve
from app.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)

# Single message for unknown users and wrong passwords so callers cannot enumerate usernames.
BAD_CREDENTIALS_MESSAGE = "Invalid username or password."


class AuthenticationError(Exception):
    """Base class for failed logins."""


class BadCredentials(AuthenticationError):
    def __init__(self) -> None:
        super().__init__(BAD_CREDENTIALS_MESSAGE)


class AccountLocked(AuthenticationError):
    pass


class AccountDisabled(AuthenticationError):
    pass


class AccountExpired(AuthenticationError):
    pass


class CredentialsExpired(AuthenticationError):
    pass


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("dummy-password-for-timing")


def check_account_status(principal: Principal) -> None:
    """Raise the matching AuthenticationError if any status flag blocks sign-in."""
    if not principal.account_non_locked:
        raise AccountLocked(f"User account is locked: {principal.username}")
    if not principal.enabled:
        raise AccountDisabled(f"User is disabled: {principal.username}")
    if not principal.account_non_expired:
        raise AccountExpired(f"User account has expired: {principal.username}")
    if not principal.credentials_non_expired:
        raise CredentialsExpired(f"User credentials have expired: {principal.username}")


def authenticate(store: IdentityStore, username: str, password: str) -> Principal:
    """
    Return the Principal for username if password matches and the account is usable.

    Unknown users and wrong passwords both raise BadCredentials. Status checks run only
    after the password is verified, so account state is not revealed to guessers.
    """
    try:
        principal = resolve(store, username)
    except IdentityNotFound:
        # Burn a bcrypt check so the response time matches a known user.
        verify_password(password, _dummy_hash())
        logger.info("Login failed for username=%s", username)
        raise BadCredentials() from None

    if not verify_password(password, principal.password_hash):
        logger.info("Login failed for username=%s", username)
        raise BadCredentials()

    check_account_status(principal)
    return principal
