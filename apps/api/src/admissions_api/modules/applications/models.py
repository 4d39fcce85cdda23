"""
Admission Applications Models

Database model for admission applications submitted through the public form.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from admissions_api.core.database import Base
from admissions_api.modules.shared import utcnow


class ApplicationStatus(str, enum.Enum):
    """Review status of an admission application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Application(Base):
    """
    Admission application.

    Created by the public intake endpoint; status is changed and records are
    deleted only by authenticated admins.
    """

    __tablename__ = "applications"

    # Primary key (assigned by the database, never reused by the application)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Student
    student_name: Mapped[str] = mapped_column(String(200), nullable=False)
    date_of_birth: Mapped[str] = mapped_column(String(40), nullable=False)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    class_applying: Mapped[str] = mapped_column(String(50), nullable=False)
    previous_school: Mapped[str | None] = mapped_column(String(200), nullable=True)

    # Parents / guardians
    parent_name: Mapped[str] = mapped_column(String(200), nullable=False)
    mother_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    parent_phone: Mapped[str] = mapped_column(String(40), nullable=False)
    parent_email: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Free-text notes from the submitter
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(
            ApplicationStatus,
            name="application_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    __table_args__ = (
        Index("ix_applications_status", "status"),
        Index("ix_applications_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Application(id={self.id}, student={self.student_name}, status={self.status.value})>"
