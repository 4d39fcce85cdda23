"""
Admin Account Models

Database model for back-office admin accounts.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from admissions_api.core.database import Base
from admissions_api.modules.shared import utcnow


class AdminAccount(Base):
    """
    Admin account used to sign in to the back-office.

    Emails are stored lower-cased and are unique. Passwords are stored only
    as bcrypt hashes.
    """

    __tablename__ = "admin_accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<AdminAccount(id={self.id}, email={self.email})>"
