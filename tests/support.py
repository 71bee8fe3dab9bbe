"""Test helpers: an AppContext backed by in-memory SQLite instead of PostgreSQL."""

from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from warden.core.config import Settings
from warden.core.context import AppContext
from warden.core.database import build_session_factory
from warden.models import Base


def build_test_context(**settings_overrides: object) -> AppContext:
    """Fresh schema per call; one shared connection so every session sees the same data."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(engine)
    settings = Settings(_env_file=None, **settings_overrides)
    return AppContext(settings=settings, session_factory=build_session_factory(engine))
