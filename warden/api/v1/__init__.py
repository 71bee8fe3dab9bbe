"""API routes."""

from fastapi import APIRouter

from warden.api.v1 import admin, health, user

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(user.router, prefix="/user", tags=["user"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
