"""
Shared test configuration.

Environment variables are set before the application package is imported
so the cached settings point at a throwaway SQLite database.
"""

import os
import tempfile
from pathlib import Path

import pytest

_TEST_DIR = Path(tempfile.mkdtemp(prefix="admissions-api-tests-"))
TEST_DB_PATH = _TEST_DIR / "test.db"

os.environ["PYTHON_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-that-is-long-enough-for-hs256"
os.environ["ADMIN_EMAIL"] = "admin@test.school"
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
os.environ["ADMIN_FULL_NAME"] = "Test Admin"
os.environ["ADMIN_SIGNUP_ENABLED"] = "true"

ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]


@pytest.fixture
def client():
    """
    A TestClient running the full app against an empty database.

    The database file is removed before startup; the lifespan recreates
    the tables and seeds the default admin.
    """
    from fastapi.testclient import TestClient

    from admissions_api.main import app

    TEST_DB_PATH.unlink(missing_ok=True)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_token(client):
    """Log in as the seeded admin and return the access token."""
    response = client.post(
        "/api/admin/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def application_payload():
    """A complete, valid intake payload."""
    return {
        "studentName": "Asha",
        "dateOfBirth": "2015-04-01",
        "classApplying": "II",
        "parentName": "Rao",
        "parentPhone": "9990001111",
        "parentEmail": "rao@example.com",
    }
