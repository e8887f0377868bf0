import os
import sys
import tempfile

# Point the app at a throwaway SQLite file before db.py reads the environment
_tmp_dir = tempfile.mkdtemp(prefix="callsheet-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}")
os.environ.setdefault("STORAGE_DIR", os.path.join(_tmp_dir, "uploads"))

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, delete

from app import app
from db import create_db_and_tables, engine, get_session
from models import CrewMember, Look, Production
from store import RecordStore


@pytest.fixture(scope="function")
def test_session():
    """Create a test database session."""
    create_db_and_tables()
    with Session(engine) as session:
        yield session
        # Clean up all test data after test
        session.rollback()
        session.exec(delete(Look))
        session.exec(delete(CrewMember))
        session.exec(delete(Production))
        session.commit()


@pytest.fixture(scope="function")
def store(test_session):
    return RecordStore(test_session)


@pytest.fixture(scope="function")
def client(test_session):
    """Create a test client with dependency override."""

    def get_test_session():
        yield test_session

    app.dependency_overrides[get_session] = get_test_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def production(store):
    return store.insert("production", {"name": "Spring Editorial"})
