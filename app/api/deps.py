"""FastAPI dependencies shared by the routers."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.principal import Principal
from app.services.identity_store import IdentityStore


def get_identity_store(db: Annotated[Session, Depends(get_db)]) -> IdentityStore:
    return IdentityStore(db)


def get_principal(request: Request) -> Principal:
    """Principal set by AccessControlMiddleware. Raises 401 on routes reached anonymously."""
    principal = getattr(request.state, "principal", None)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


StoreDep = Annotated[IdentityStore, Depends(get_identity_store)]
PrincipalDep = Annotated[Principal, Depends(get_principal)]
