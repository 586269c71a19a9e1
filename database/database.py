"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and a simple `init_db` helper that
creates tables. When `DATABASE_URL` is set to an empty string no engine is
created and every attempt to open a session raises `NotConfiguredError`.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config import DATABASE_URL, READ_DATABASE_URL
from core.exceptions import NotConfiguredError
from core.logger import get_logger
from .models import Base

logger = get_logger("database")


def _make_engine(url):
    if not url:
        return None
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args)


# Read/Write partitioning pattern
# In production, set DATABASE_URL and READ_DATABASE_URL to different DB instances.
# For SQLite/demo both point at the same file but the interfaces are separated.
write_engine = _make_engine(DATABASE_URL)
read_engine = _make_engine(READ_DATABASE_URL) or write_engine

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine) if write_engine is not None else None
ReadSessionLocal = sessionmaker(bind=read_engine) if read_engine is not None else None


def is_configured() -> bool:
    return WriteSessionLocal is not None


def init_db():
    """Create all tables using SQLAlchemy models.

    Raises:
        NotConfiguredError: If no database URL has been configured.
    """
    if write_engine is None:
        raise NotConfiguredError()
    Base.metadata.create_all(bind=write_engine)
    logger.info("Database schema ready")


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope.

    Use this generator as a FastAPI dependency to ensure the session is
    properly closed after the request completes.
    """
    if WriteSessionLocal is None:
        raise NotConfiguredError()
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope.

    Used for read endpoints where routing reads to a replica may be desired.
    """
    if ReadSessionLocal is None:
        raise NotConfiguredError("READ_DATABASE_URL")
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
