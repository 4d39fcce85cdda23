"""
Fixtures for admission applications tests.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from admissions_api.modules.applications.models import Application, ApplicationStatus
from admissions_api.modules.applications.schemas import ApplicationCreate


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.rollback = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def sample_application_create():
    """Create a sample intake request with every required field."""
    return ApplicationCreate(
        student_name="Asha",
        date_of_birth="2015-04-01",
        class_applying="II",
        parent_name="Rao",
        parent_phone="9990001111",
        parent_email="rao@example.com",
    )


@pytest.fixture
def sample_application_model():
    """Create a sample stored application."""
    app = MagicMock(spec=Application)
    app.id = 1
    app.student_name = "Asha"
    app.date_of_birth = "2015-04-01"
    app.gender = None
    app.class_applying = "II"
    app.previous_school = None
    app.parent_name = "Rao"
    app.mother_name = None
    app.parent_phone = "9990001111"
    app.parent_email = "rao@example.com"
    app.address = "12 Temple Road"
    app.message = None
    app.status = ApplicationStatus.PENDING
    app.created_at = datetime(2026, 1, 15, 9, 30, tzinfo=UTC)
    app.updated_at = datetime(2026, 1, 15, 9, 30, tzinfo=UTC)
    return app
