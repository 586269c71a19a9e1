"""Shared fixtures: a throwaway SQLite database and request-style sessions."""

import os
import tempfile

# Must be set before any application module reads the configuration.
_TMP_DIR = tempfile.mkdtemp(prefix="nutrition-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")
os.environ.pop("READ_DATABASE_URL", None)
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")

import pytest

from database import init_db
from database.database import WriteSessionLocal, write_engine
from database.models import Base


@pytest.fixture
def db():
    """Fresh schema per test with a write session."""
    Base.metadata.drop_all(bind=write_engine)
    init_db()
    session = WriteSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def biometrics_form():
    """The step 1 form as the client submits it."""
    return {
        "age": 28,
        "gender": "Male",
        "height": 175,
        "weight": 75,
        "targetWeight": 70,
        "activityLevel": "Moderate",
    }
