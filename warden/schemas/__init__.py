"""Pydantic request/response schemas."""

from warden.schemas.auth import LoginRequest, LoginResponse, Principal
from warden.schemas.health import HealthResponse
from warden.schemas.user import NewUser, UserRead, UsersListResponse

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "NewUser",
    "Principal",
    "UserRead",
    "UsersListResponse",
]
