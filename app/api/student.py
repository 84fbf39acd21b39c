"""Student area: reachable by ROLE_STUDENT and ROLE_ADMIN."""

from fastapi import APIRouter

from app.api.deps import PrincipalDep
from app.schemas.auth import PrincipalResponse

router = APIRouter()

# Reading list shown to every student.
BOOKS = [
    {"isbn": "978-0132350884", "title": "Clean Code"},
    {"isbn": "978-1491946008", "title": "Fluent Python"},
    {"isbn": "978-0201633610", "title": "Design Patterns"},
]


@router.get("/books")
def list_books(principal: PrincipalDep) -> dict:
    return {"username": principal.username, "books": BOOKS}


@router.get("/profile", response_model=PrincipalResponse)
def profile(principal: PrincipalDep) -> PrincipalResponse:
    return PrincipalResponse(
        username=principal.username,
        authorities=sorted(principal.authorities),
    )
