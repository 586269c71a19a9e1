"""Dependency helpers for FastAPI endpoints.

Exposes read/write session generators plus factories that bind the
repositories and the profile service to a request-scoped session.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from core.repository import ProfileRepository, UserRepository
from services.profile_service import ProfileService
from .database import get_read_session, get_write_session


def get_db_write():
    """Yield a write-capable DB session for FastAPI dependency injection."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()


def get_profile_repository(db: Session = Depends(get_db_write)) -> ProfileRepository:
    return ProfileRepository(db)


def get_profile_service(db: Session = Depends(get_db_write)) -> ProfileService:
    return ProfileService(ProfileRepository(db), UserRepository(db))


def get_profile_reader(db: Session = Depends(get_db_read)) -> ProfileService:
    """Profile service bound to the read replica, for GET routes."""
    return ProfileService(ProfileRepository(db), UserRepository(db))
