"""
Filadex Test Suite: Shared Fixtures
conftest.py

Tests run in-process against the FastAPI app through TestClient. The
environment is pointed at a throwaway SQLite file before any backend module is
imported; every test starts from empty tables plus the seeded admin account.

Usage:
    pytest tests/ -v --tb=short
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Configuration (must happen before backend imports read the environment)
# ---------------------------------------------------------------------------

BACKEND_DIR = Path(__file__).resolve().parents[1] / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

_DB_DIR = tempfile.mkdtemp(prefix="filadex-tests-")

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-test-pass"

os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/filadex-test.db"
os.environ["JWT_SECRET"] = "filadex-test-secret-with-enough-bytes-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "10"
os.environ["ADMIN_USERNAME"] = ADMIN_USERNAME
os.environ["ADMIN_PASSWORD"] = ADMIN_PASSWORD
os.environ["SEED_REFERENCE_DATA"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient  # noqa: E402

from helpers import login  # noqa: E402


# ---------------------------------------------------------------------------
# App / database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    from main import app as _app
    return _app


@pytest.fixture()
def db_session(app):
    """A raw SQLAlchemy session on the test database."""
    from core.db import SessionLocal
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(app):
    """Anonymous client on fresh tables. Entering the client runs the lifespan,
    which recreates the schema and seeds the admin account."""
    from core.db import Base, engine
    from core.rate_limit import limiter

    Base.metadata.drop_all(bind=engine)
    limiter.reset()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_client(app, client):
    """Factory for extra clients (each with its own cookie jar) on the same database."""
    def _make():
        return TestClient(app)
    return _make


@pytest.fixture()
def admin_client(client):
    resp = login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
    assert resp.status_code == 200, resp.text
    return client


@pytest.fixture()
def user_client(admin_client, make_client):
    """A second, non-admin user logged in on its own client."""
    from helpers import create_user

    create_user(admin_client, "alice", "alice-pass")
    c = make_client()
    resp = login(c, "alice", "alice-pass")
    assert resp.status_code == 200, resp.text
    return c
