"""
Admission Applications Service Layer

Business logic for admission applications.
Orchestrates repository operations and converts storage failures into
service errors the routers can render.

This module implements:
1. Intake:
   - Check required fields in a fixed order, naming the first missing one
   - Then check the parent e-mail address (stored as submitted)
   - Store the application with status 'pending'
   - No duplicate detection: identical submissions are stored separately

2. Admin operations (authentication enforced at router level):
   - List, inspect and count applications
   - Export all applications as CSV
   - Change an application's status (pending/approved/rejected)
   - Delete one or all applications

Failure policy:
- Any database error rolls the session back, is logged with its traceback,
  and is reported as a generic 500; nothing is retried
"""

import logging

from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from admissions_api.core.exceptions import ServiceError
from admissions_api.modules.applications import repository
from admissions_api.modules.applications.export import applications_to_csv
from admissions_api.modules.applications.models import Application, ApplicationStatus
from admissions_api.modules.applications.schemas import (
    ApplicationCreate,
    ApplicationSubmitResponse,
)

logger = logging.getLogger(__name__)

# Largest value the Integer primary key column can hold
MAX_APPLICATION_ID = 2**31 - 1

_email_adapter = TypeAdapter(EmailStr)


class ApplicationServiceError(ServiceError):
    """Base exception for application service errors."""


class MissingFieldError(ApplicationServiceError):
    """Raised when a required intake field is missing or blank."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            message=f"{field} is required",
            error_code="MISSING_FIELD",
            status_code=400,
        )


class InvalidFieldError(ApplicationServiceError):
    """Raised when a present intake field has an unacceptable value."""

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(
            message=f"{field}: {reason}",
            error_code="VALIDATION_ERROR",
            status_code=400,
        )


class ApplicationNotFoundError(ApplicationServiceError):
    """Raised when an application is not found."""

    def __init__(self, application_id: int | None = None):
        self.application_id = application_id
        super().__init__(
            message="Application not found",
            error_code="APPLICATION_NOT_FOUND",
            status_code=404,
        )


class InvalidApplicationIdError(ApplicationServiceError):
    """Raised when a path id is not a positive integer."""

    def __init__(self):
        super().__init__(
            message="Invalid id",
            error_code="INVALID_ID",
            status_code=400,
        )


class InvalidStatusError(ApplicationServiceError):
    """Raised when a status value is not one of pending/approved/rejected."""

    def __init__(self, value: str | None):
        allowed = ", ".join(s.value for s in ApplicationStatus)
        self.value = value
        super().__init__(
            message=f"status must be one of: {allowed}",
            error_code="INVALID_STATUS",
            status_code=400,
        )


class PersistenceError(ApplicationServiceError):
    """Raised when the database rejects a read or write."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="PERSISTENCE_ERROR",
            status_code=500,
        )


async def _persistence_failure(db: AsyncSession, message: str) -> PersistenceError:
    """Roll back the session, log the active exception and build the error."""
    logger.exception(message)
    try:
        await db.rollback()
    except SQLAlchemyError:
        logger.exception("Rollback failed")
    return PersistenceError(message)


def parse_application_id(raw: str | int) -> int:
    """
    Parse an application id from a path segment.

    Raises:
        InvalidApplicationIdError: If the value is not a positive integer that
            fits the id column
    """
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise InvalidApplicationIdError() from None
    if value <= 0 or value > MAX_APPLICATION_ID:
        raise InvalidApplicationIdError()
    return value


def check_email(field: str, value: str) -> None:
    """
    Check that value is a syntactically valid e-mail address.

    The value itself is not rewritten; the address is stored as submitted.

    Raises:
        InvalidFieldError: If the address is malformed
    """
    try:
        _email_adapter.validate_python(value)
    except ValidationError as e:
        raise InvalidFieldError(field, e.errors()[0]["msg"]) from None


def parse_status(value: str | None) -> ApplicationStatus:
    """
    Parse a status value.

    Raises:
        InvalidStatusError: If value is not exactly one of the enum values
    """
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise InvalidStatusError(value) from None


# ============================================
# Intake
# ============================================


async def submit_application(
    db: AsyncSession,
    data: ApplicationCreate,
) -> ApplicationSubmitResponse:
    """
    Validate and store a new admission application.

    Args:
        db: Database session
        data: Submitted form data

    Returns:
        The new application's id

    Raises:
        MissingFieldError: If a required field is missing or blank
        InvalidFieldError: If parentEmail is not a valid address
        PersistenceError: If the application could not be saved
    """
    missing = data.first_missing_field()
    if missing:
        logger.info(f"Application rejected: {missing} missing")
        raise MissingFieldError(missing)

    check_email("parentEmail", data.parent_email)

    try:
        application = await repository.create(db, data)
    except SQLAlchemyError:
        raise await _persistence_failure(db, "Failed to save application") from None

    logger.info(f"Application stored: id={application.id}, class={application.class_applying}")
    return ApplicationSubmitResponse(id=application.id)


# ============================================
# Admin operations
# ============================================


async def admin_list_applications(
    db: AsyncSession,
    *,
    status: ApplicationStatus | None = None,
    newest_first: bool = True,
) -> list[Application]:
    """Get every application (unpaginated), newest first by default."""
    try:
        return await repository.list_all(db, status=status, newest_first=newest_first)
    except SQLAlchemyError:
        raise await _persistence_failure(db, "Failed to load applications") from None


async def admin_get_application(db: AsyncSession, application_id: int) -> Application:
    """
    Get one application.

    Raises:
        ApplicationNotFoundError: If it doesn't exist
    """
    try:
        application = await repository.get_by_id(db, application_id)
    except SQLAlchemyError:
        raise await _persistence_failure(db, "Failed to load application") from None

    if application is None:
        logger.info(f"Application not found: {application_id}")
        raise ApplicationNotFoundError(application_id)

    return application


async def admin_get_stats(db: AsyncSession) -> dict[str, int]:
    """Get total and per-status counts."""
    try:
        return await repository.count_by_status(db)
    except SQLAlchemyError:
        raise await _persistence_failure(db, "Failed to load statistics") from None


async def admin_export_csv(db: AsyncSession) -> str:
    """
    Export all applications as CSV, oldest first.

    Returns:
        CSV text; only the header line when there are no applications
    """
    applications = await admin_list_applications(db, newest_first=False)
    logger.info(f"Exporting {len(applications)} applications to CSV")
    return applications_to_csv(applications)


async def admin_update_status(
    db: AsyncSession,
    application_id: int,
    status: str | None,
) -> Application:
    """
    Change an application's status.

    The value is validated before the record is touched, so an invalid
    status leaves the stored status unchanged.

    Raises:
        InvalidStatusError: If status is not pending/approved/rejected
        ApplicationNotFoundError: If the application doesn't exist
        PersistenceError: If the update could not be saved
    """
    new_status = parse_status(status)

    try:
        application = await repository.update_status(db, application_id, new_status)
    except SQLAlchemyError:
        raise await _persistence_failure(db, "Failed to update application") from None

    if application is None:
        raise ApplicationNotFoundError(application_id)

    logger.info(f"Application {application_id} status set to {new_status.value}")
    return application


async def admin_delete_application(db: AsyncSession, application_id: int) -> None:
    """
    Delete one application.

    Raises:
        ApplicationNotFoundError: If no application has this id
        PersistenceError: If the delete could not be saved
    """
    try:
        deleted = await repository.delete_by_id(db, application_id)
    except SQLAlchemyError:
        raise await _persistence_failure(db, "Failed to delete") from None

    if not deleted:
        raise ApplicationNotFoundError(application_id)

    logger.info(f"Application {application_id} deleted")


async def admin_delete_all(db: AsyncSession) -> int:
    """
    Delete every application. Cannot be undone.

    Returns:
        Number of applications removed
    """
    try:
        deleted = await repository.delete_all(db)
    except SQLAlchemyError:
        raise await _persistence_failure(db, "Failed to clear applications") from None

    logger.warning(f"All applications cleared ({deleted} removed)")
    return deleted
