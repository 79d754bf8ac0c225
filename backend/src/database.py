"""Database session factory and configuration.

Provides database connectivity and session management for the ContactFlow
backend. Works against PostgreSQL in production and SQLite for local
development and tests.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from config import get_settings
from models.base import Base

DATABASE_URL = get_settings().DATABASE_URL

_engine_kwargs = {
    "pool_pre_ping": True,  # Verify connections before using
    "echo": False,  # Set to True for SQL query logging
}

if DATABASE_URL.startswith("sqlite"):
    # Needed for SQLite when used from the ASGI threadpool
    _engine_kwargs["connect_args"] = {"check_same_thread": False}
else:
    _engine_kwargs["pool_size"] = 5
    _engine_kwargs["max_overflow"] = 10

engine = create_engine(DATABASE_URL, **_engine_kwargs)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def create_tables() -> None:
    """Create any missing tables for the registered models."""
    import models  # noqa: F401  (registers Submitter and Message)

    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI endpoints.

    Usage:
        @app.get("/submitters")
        def list_submitters(db: Session = Depends(get_db)):
            return db.query(Submitter).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
