"""PostgreSQL engine, connection pool and per-request session management."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from warden.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    """Create the pooled engine: DB_POOL_MIN_SIZE kept open, up to DB_POOL_MAX_SIZE under load."""
    return create_engine(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_MIN_SIZE,
        max_overflow=settings.DB_POOL_MAX_SIZE - settings.DB_POOL_MIN_SIZE,
        pool_recycle=settings.DB_POOL_MAX_LIFETIME_SEC,
        pool_pre_ping=True,
        echo=settings.DEBUG,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a DB session from the app context and closes it when done."""
    db = request.app.state.context.session_factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
