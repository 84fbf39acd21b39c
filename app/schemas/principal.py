"""Principal: the resolved identity and authority set of a user."""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field


class Principal(BaseModel):
    """
    Immutable view of a user built fresh by the identity resolver for each authentication.

    authorities holds one "ROLE_<name>" token per role assigned to the user.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password_hash: str = Field(repr=False, exclude=True)
    enabled: bool = True
    account_non_expired: bool = True
    account_non_locked: bool = True
    credentials_non_expired: bool = True
    authorities: frozenset[str] = frozenset()

    def has_any_authority(self, required: Iterable[str]) -> bool:
        """True if at least one of the required authorities was granted."""
        return not self.authorities.isdisjoint(required)

    @property
    def is_account_usable(self) -> bool:
        """True when every account-status flag allows the user to sign in."""
        return (
            self.enabled
            and self.account_non_expired
            and self.account_non_locked
            and self.credentials_non_expired
        )
