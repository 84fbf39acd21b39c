"""Teacher (admin) area: grades and account administration. Requires ROLE_ADMIN."""

import logging

from fastapi import APIRouter, HTTPException, status

from app.api.deps import PrincipalDep, StoreDep
from app.schemas.auth import AccountStatusResponse, UserListItem, UsersListResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Flag changes applied by each account action.
ACCOUNT_ACTIONS: dict[str, dict[str, bool]] = {
    "lock": {"account_non_locked": False},
    "unlock": {"account_non_locked": True},
    "disable": {"enabled": False},
    "enable": {"enabled": True},
}

GRADES = [
    {"student": "student", "course": "Algorithms", "grade": "A"},
    {"student": "student", "course": "Databases", "grade": "B+"},
]


@router.get("/grades")
def list_grades(principal: PrincipalDep) -> dict:
    return {"requested_by": principal.username, "grades": GRADES}


@router.get("/users", response_model=UsersListResponse)
def list_users(_admin: PrincipalDep, store: StoreDep) -> UsersListResponse:
    """List all users with their roles (no password hashes)."""
    items = []
    for user in store.list_users():
        item = UserListItem.model_validate(user)
        item.roles = [role.name for role in store.find_roles_for_user(user)]
        items.append(item)
    return UsersListResponse(users=items)


@router.post("/users/{username}/{action}", response_model=AccountStatusResponse)
def change_account_status(
    username: str,
    action: str,
    admin: PrincipalDep,
    store: StoreDep,
) -> AccountStatusResponse:
    """Lock, unlock, enable or disable an account."""
    flags = ACCOUNT_ACTIONS.get(action)
    if flags is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown account action: {action}",
        )
    if not store.update_account_status(username, **flags):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    logger.info("Account %s: username=%s by=%s", action, username, admin.username)
    return AccountStatusResponse(username=username, action=action)
