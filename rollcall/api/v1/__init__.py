"""API v1 routes."""

from fastapi import APIRouter

from rollcall.api.v1 import admin, audit, auth, health, permissions, voters

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
router.include_router(voters.router, prefix="/voters", tags=["voters"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
