"""
Admission Applications Schemas

Pydantic schemas for request validation and response serialization.
JSON uses camelCase keys (studentName, parentEmail, ...).
"""

from datetime import datetime

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from admissions_api.modules.applications.models import ApplicationStatus
from admissions_api.modules.shared import CamelModel, ensure_utc

# Required intake fields, in the order they are checked: (attribute, JSON name)
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("student_name", "studentName"),
    ("date_of_birth", "dateOfBirth"),
    ("class_applying", "classApplying"),
    ("parent_name", "parentName"),
    ("parent_phone", "parentPhone"),
    ("parent_email", "parentEmail"),
)


class ApplicationCreate(CamelModel):
    """
    Request body for POST /applications.

    Every field is optional at the schema level so that a missing required
    field is reported by name (see first_missing_field) rather than as a
    generic schema error. Blank strings are treated as absent. parentEmail
    is checked for a valid address only after every required field is present
    and is stored as submitted.
    """

    model_config = ConfigDict(str_strip_whitespace=True, coerce_numbers_to_str=True)

    student_name: str | None = Field(None, max_length=200)
    date_of_birth: str | None = Field(
        None,
        max_length=40,
        validation_alias=AliasChoices("dateOfBirth", "dob", "date_of_birth"),
    )
    gender: str | None = Field(None, max_length=20)
    class_applying: str | None = Field(None, max_length=50)
    previous_school: str | None = Field(None, max_length=200)

    parent_name: str | None = Field(
        None,
        max_length=200,
        validation_alias=AliasChoices("parentName", "fatherName", "parent_name"),
    )
    mother_name: str | None = Field(None, max_length=200)
    parent_phone: str | None = Field(None, max_length=40)
    parent_email: str | None = Field(None, max_length=255)
    address: str | None = Field(None, max_length=500)
    message: str | None = Field(None, max_length=5000)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def first_missing_field(self) -> str | None:
        """Return the JSON name of the first empty required field, if any."""
        for attribute, name in REQUIRED_FIELDS:
            if not getattr(self, attribute):
                return name
        return None


class ApplicationSubmitResponse(CamelModel):
    """Response after submitting an application."""

    success: bool = True
    id: int


class ApplicationResponse(CamelModel):
    """Full application record as returned to admins."""

    id: int
    student_name: str
    date_of_birth: str
    gender: str | None = None
    class_applying: str
    previous_school: str | None = None
    parent_name: str
    mother_name: str | None = None
    parent_phone: str
    parent_email: str
    address: str | None = None
    message: str | None = None
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class StatusUpdateRequest(CamelModel):
    """Request body for PATCH /admin/applications/{id}/status.

    Kept as a plain string so an unknown value is rejected by the service
    with a message listing the allowed statuses.
    """

    status: str | None = None


class ApplicationStats(CamelModel):
    """Counters for the admin overview."""

    total: int
    pending: int
    approved: int
    rejected: int


class SuccessResponse(CamelModel):
    success: bool = True


class BulkDeleteResponse(CamelModel):
    success: bool = True
    deleted: int
