"""
Fixtures for authentication tests.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from admissions_api.core.security import hash_password
from admissions_api.modules.users.models import AdminAccount

ACCOUNT_PASSWORD = "correct-horse"


@pytest.fixture(scope="session")
def account_password():
    return ACCOUNT_PASSWORD


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.rollback = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture(scope="session")
def account_password_hash():
    return hash_password(ACCOUNT_PASSWORD)


@pytest.fixture
def sample_account(account_password_hash):
    """Create a sample stored admin account."""
    account = MagicMock(spec=AdminAccount)
    account.id = 7
    account.full_name = "Head Teacher"
    account.email = "head@school.org"
    account.password_hash = account_password_hash
    account.created_at = datetime(2026, 1, 2, 8, 0, tzinfo=UTC)
    return account
