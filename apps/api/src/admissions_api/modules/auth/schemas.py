"""Authentication schemas."""

from datetime import datetime

from pydantic import AliasChoices, EmailStr, Field, field_validator

from admissions_api.modules.shared import CamelModel, ensure_utc


class LoginRequest(CamelModel):
    """Login request schema. Accepts `email` or `username` for the login name."""

    email: str | None = Field(
        None,
        max_length=255,
        validation_alias=AliasChoices("email", "username"),
    )
    password: str | None = Field(None, max_length=128)


class LoginResponse(CamelModel):
    """Login response schema."""

    token: str
    token_type: str = "bearer"
    expires_in: int
    name: str
    email: str


class SignupRequest(CamelModel):
    """Signup request schema. Presence and length are checked by the service."""

    full_name: str | None = Field(None, max_length=200)
    email: EmailStr | None = None
    password: str | None = Field(None, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AccountSummary(CamelModel):
    """Public view of an admin account."""

    id: int
    full_name: str
    email: str


class SignupResponse(CamelModel):
    message: str = "Account created successfully"
    user: AccountSummary


class CurrentAdminResponse(CamelModel):
    """Profile of the admin making the request."""

    id: int
    full_name: str
    email: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)
