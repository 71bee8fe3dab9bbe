"""Core app configuration, database and security primitives."""

from warden.core.config import Settings, get_settings
from warden.core.context import AppContext, build_context, get_context
from warden.core.database import get_db
from warden.core.errors import ApiError, ErrorKind

__all__ = [
    "ApiError",
    "AppContext",
    "ErrorKind",
    "Settings",
    "build_context",
    "get_context",
    "get_db",
    "get_settings",
]
