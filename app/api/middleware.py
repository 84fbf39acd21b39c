"""Access-control middleware: the request filter that applies the AccessPolicy."""

import logging

import jwt
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from app.core.security import decode_access_token
from app.schemas.principal import Principal
from app.services.access_decision import AccessDecision, AccessPolicy
from app.services.identity_resolver import IdentityNotFound, resolve
from app.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)


def extract_token(request: Request, cookie_name: str) -> str | None:
    """Session token from the cookie, falling back to an Authorization: Bearer header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:] or None
    return None


def _load_principal(session_factory, username: str) -> Principal | None:
    db = session_factory()
    try:
        principal = resolve(IdentityStore(db), username)
    except IdentityNotFound:
        return None
    finally:
        db.close()
    # A locked or disabled account loses its session on the next request.
    return principal if principal.is_account_usable else None


class AccessControlMiddleware(BaseHTTPMiddleware):
    """
    Decides every request before routing.

    Public paths pass without touching the database. Everything else needs a valid
    session token; the principal is resolved fresh from the store on each request.
    """

    def __init__(self, app, policy: AccessPolicy) -> None:
        super().__init__(app)
        self.policy = policy

    async def current_principal(self, request: Request) -> Principal | None:
        settings = request.app.state.settings
        token = extract_token(request, settings.SESSION_COOKIE_NAME)
        if not token:
            return None
        try:
            payload = decode_access_token(token, settings)
        except jwt.PyJWTError:
            return None
        username = payload.get("sub")
        if not username or not isinstance(username, str):
            return None
        return await run_in_threadpool(
            _load_principal, request.app.state.session_factory, username
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        request.state.principal = None
        if self.policy.is_public_path(path):
            return await call_next(request)

        principal = await self.current_principal(request)
        decision = self.policy.decide(path, principal)

        if decision is AccessDecision.AUTHENTICATION_REQUIRED:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Not authenticated"},
                headers={"WWW-Authenticate": "Bearer"},
            )
        if decision is AccessDecision.AUTHORIZATION_DENIED:
            logger.info(
                "Access denied: path=%s username=%s",
                path,
                principal.username if principal else None,
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"detail": "Access denied"},
            )

        request.state.principal = principal
        return await call_next(request)
