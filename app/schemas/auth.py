"""Request/response schemas for login, session and admin endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class TokenResponse(BaseModel):
    """Session JWT returned after successful login (also set as an httpOnly cookie)."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class PrincipalResponse(BaseModel):
    """Current principal as exposed over HTTP (no password hash)."""

    username: str
    authorities: list[str]


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str | None = None
    enabled: bool
    account_non_locked: bool
    account_non_expired: bool
    credentials_non_expired: bool
    roles: list[str] = Field(default_factory=list)


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[UserListItem]


class AccountStatusResponse(BaseModel):
    """Result of an administrative account-status change."""

    username: str
    action: str
    updated: bool = True
