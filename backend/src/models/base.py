"""Base SQLAlchemy declarative base for all models"""

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base


def utcnow() -> datetime:
    """Current UTC time as a naive datetime.

    Timestamps are stored without a zone so comparisons behave the same on
    PostgreSQL (TIMESTAMP WITHOUT TIME ZONE) and SQLite.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


Base = declarative_base()
