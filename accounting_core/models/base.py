"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db().
"""

from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from accounting_core.config import get_settings

settings = get_settings()

# pool_pre_ping=True tests connections before using them, which
# handles a database restart or a stale connection.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# autocommit=False: the caller decides when a unit of work is
# committed or rolled back. The journal two-phase protocol relies
# on this: persist flushes, commit commits, cancel rolls back.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp, the format every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db():
    """
    Provide a database session for a single request.

    The try/finally pattern ensures the session is always
    closed, preventing connection leaks.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
