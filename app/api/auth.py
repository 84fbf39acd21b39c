"""Login, logout and current-principal endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse

from app.api.deps import PrincipalDep, StoreDep
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    create_access_token,
)
from app.schemas.auth import LoginRequest, PrincipalResponse, TokenResponse
from app.services.authentication import (
    BAD_CREDENTIALS_MESSAGE,
    AuthenticationError,
    authenticate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=BAD_CREDENTIALS_MESSAGE,
    )


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    store: StoreDep,
) -> TokenResponse:
    """
    Authenticate with username and password.

    Sets the session cookie and also returns the token for clients that prefer
    Authorization: Bearer <access_token>.
    """
    if not (USERNAME_MIN_LEN <= len(body.username) <= USERNAME_MAX_LEN):
        raise _invalid_credentials()
    if not (PASSWORD_MIN_LEN <= len(body.password) <= PASSWORD_MAX_LEN):
        raise _invalid_credentials()

    try:
        principal = authenticate(store, body.username, body.password)
    except AuthenticationError as e:
        # Never tell the caller which check failed.
        logger.info("Login rejected: username=%s reason=%s", body.username, type(e).__name__)
        raise _invalid_credentials() from None

    settings = request.app.state.settings
    token = create_access_token(principal.username, settings)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.APP_ENV == "prod",
    )
    return TokenResponse(access_token=token, token_type="bearer")


@router.post("/logout")
def logout(request: Request) -> RedirectResponse:
    """Clear the session cookie and redirect to the logout landing page."""
    settings = request.app.state.settings
    response = RedirectResponse(
        url=settings.LOGOUT_REDIRECT_URL,
        status_code=status.HTTP_303_SEE_OTHER,
    )
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/me", response_model=PrincipalResponse)
def me(principal: PrincipalDep) -> PrincipalResponse:
    return PrincipalResponse(
        username=principal.username,
        authorities=sorted(principal.authorities),
    )
