"""Application context: settings and session factory, built once at startup and shared read-only."""

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.orm import Session, sessionmaker

from warden.core.config import Settings, get_settings
from warden.core.database import build_engine, build_session_factory


@dataclass(frozen=True)
class AppContext:
    """Everything handlers and gates need from process-wide state."""

    settings: Settings
    session_factory: sessionmaker[Session]


def build_context(settings: Settings | None = None) -> AppContext:
    """Build the production context from settings (defaults to env-loaded settings)."""
    settings = settings or get_settings()
    engine = build_engine(settings)
    return AppContext(settings=settings, session_factory=build_session_factory(engine))


def get_context(request: Request) -> AppContext:
    """Dependency: the AppContext the running app was created with."""
    return request.app.state.context
