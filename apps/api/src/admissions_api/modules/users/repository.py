"""
Admin Account Repository

Database operations for admin accounts.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from admissions_api.modules.users.models import AdminAccount

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Repository for admin account database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        full_name: str,
        email: str,
        password_hash: str,
    ) -> AdminAccount:
        """
        Create and commit a new admin account.

        Args:
            db: Database session
            full_name: Display name
            email: Email address (unique; stored lower-cased)
            password_hash: bcrypt hash of the password

        Returns:
            Created AdminAccount

        Raises:
            sqlalchemy.exc.IntegrityError: If the email is already registered
        """
        account = AdminAccount(
            full_name=full_name,
            email=normalize_email(email),
            password_hash=password_hash,
        )

        db.add(account)
        await db.commit()
        await db.refresh(account)

        logger.info(f"Created admin account: {account.id} - {account.email}")
        return account

    @staticmethod
    async def get_by_id(db: AsyncSession, account_id: int) -> AdminAccount | None:
        """Get an admin account by ID."""
        return await db.get(AdminAccount, account_id)

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> AdminAccount | None:
        """
        Get an admin account by email address (case-insensitive).

        Returns:
            AdminAccount or None if not found
        """
        result = await db.execute(
            select(AdminAccount).where(AdminAccount.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def email_exists(db: AsyncSession, email: str) -> bool:
        """Check if an email address is already registered."""
        account = await UserRepository.get_by_email(db, email)
        return account is not None
