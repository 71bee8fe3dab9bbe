"""SQLAlchemy ORM models."""

from warden.models.base import Base
from warden.models.token import Token
from warden.models.user import User

__all__ = ["Base", "Token", "User"]
