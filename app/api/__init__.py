"""HTTP routes. URL prefixes here must line up with the configured ACCESS_RULES."""

from fastapi import APIRouter

from app.api import admin, auth, health, student

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(student.router, prefix="/student", tags=["student"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
