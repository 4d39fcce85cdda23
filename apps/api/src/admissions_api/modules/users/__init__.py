"""
Users module - Admin accounts.
"""

from admissions_api.modules.users.models import AdminAccount
from admissions_api.modules.users.repository import UserRepository

__all__ = ["AdminAccount", "UserRepository"]
