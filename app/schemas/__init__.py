"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AccountStatusResponse,
    LoginRequest,
    PrincipalResponse,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.principal import Principal

__all__ = [
    "AccountStatusResponse",
    "HealthResponse",
    "LoginRequest",
    "Principal",
    "PrincipalResponse",
    "TokenResponse",
    "UserListItem",
    "UsersListResponse",
]
