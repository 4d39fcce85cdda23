"""
Authentication Service

Admin login, signup and the startup seed of the default admin account.

Login failures are deliberately indistinguishable: an unknown email and a
wrong password both produce "Invalid email or password".
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from admissions_api.core.config import Settings, settings
from admissions_api.core.exceptions import ServiceError
from admissions_api.core.security import create_access_token, hash_password, verify_password
from admissions_api.modules.auth.schemas import (
    AccountSummary,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
)
from admissions_api.modules.users.models import AdminAccount
from admissions_api.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72

# Checked against when the e-mail is unknown so both login failures cost one bcrypt check
DUMMY_PASSWORD_HASH = hash_password("unknown-account-placeholder")


class AuthServiceError(ServiceError):
    """Base exception for authentication errors."""


class MissingCredentialsError(AuthServiceError):
    def __init__(self):
        super().__init__(
            message="Email and password required",
            error_code="MISSING_CREDENTIALS",
            status_code=400,
        )


class InvalidCredentialsError(AuthServiceError):
    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            error_code="INVALID_CREDENTIALS",
            status_code=401,
        )


class SignupValidationError(AuthServiceError):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="INVALID_SIGNUP",
            status_code=400,
        )


class EmailAlreadyRegisteredError(AuthServiceError):
    def __init__(self):
        super().__init__(
            message="Email already registered",
            error_code="EMAIL_ALREADY_REGISTERED",
            status_code=400,
        )


class SignupDisabledError(AuthServiceError):
    def __init__(self):
        super().__init__(
            message="Admin signup is disabled",
            error_code="SIGNUP_DISABLED",
            status_code=403,
        )


class AccountStoreError(AuthServiceError):
    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code="PERSISTENCE_ERROR",
            status_code=500,
        )


def issue_token(account: AdminAccount) -> LoginResponse:
    """Sign an access token for an account and build the login response."""
    expires_in = timedelta(minutes=settings.access_token_expire_minutes)
    token = create_access_token(
        subject=str(account.id),
        additional_claims={"email": account.email, "name": account.full_name},
        expires_delta=expires_in,
    )
    return LoginResponse(
        token=token,
        expires_in=int(expires_in.total_seconds()),
        name=account.full_name,
        email=account.email,
    )


async def login(db: AsyncSession, credentials: LoginRequest) -> LoginResponse:
    """
    Authenticate an admin and issue an access token.

    Raises:
        MissingCredentialsError: If email or password is missing
        InvalidCredentialsError: If the email is unknown or the password is wrong
    """
    email = (credentials.email or "").strip()
    if not email or not credentials.password:
        raise MissingCredentialsError()

    try:
        account = await UserRepository.get_by_email(db, email)
    except SQLAlchemyError:
        logger.exception("Failed to load admin account")
        raise AccountStoreError("Login failed") from None

    password_hash = account.password_hash if account is not None else DUMMY_PASSWORD_HASH
    if not verify_password(credentials.password, password_hash) or account is None:
        logger.warning(f"Failed login attempt for {email.lower()}")
        raise InvalidCredentialsError()

    logger.info(f"Admin logged in: {account.email}")
    return issue_token(account)


async def signup(
    db: AsyncSession,
    data: SignupRequest,
    config: Settings = settings,
) -> SignupResponse:
    """
    Register a new admin account.

    Raises:
        SignupDisabledError: If ADMIN_SIGNUP_ENABLED is false
        SignupValidationError: If a field is missing or the password is too short
        EmailAlreadyRegisteredError: If the email is taken
    """
    if not config.admin_signup_enabled:
        raise SignupDisabledError()

    full_name = (data.full_name or "").strip()
    if not full_name or not data.email or not data.password:
        raise SignupValidationError("Missing required fields")

    if len(data.password) < MIN_PASSWORD_LENGTH:
        raise SignupValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(data.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise SignupValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    try:
        if await UserRepository.email_exists(db, data.email):
            raise EmailAlreadyRegisteredError()

        account = await UserRepository.create(
            db,
            full_name=full_name,
            email=data.email,
            password_hash=hash_password(data.password),
        )
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email
        await db.rollback()
        raise EmailAlreadyRegisteredError() from None
    except SQLAlchemyError:
        logger.exception("Failed to create admin account")
        await db.rollback()
        raise AccountStoreError("Failed to create account") from None

    return SignupResponse(
        user=AccountSummary(id=account.id, full_name=account.full_name, email=account.email)
    )


async def get_account(db: AsyncSession, account_id: int) -> AdminAccount | None:
    return await UserRepository.get_by_id(db, account_id)


async def ensure_default_admin(db: AsyncSession, config: Settings = settings) -> AdminAccount:
    """
    Create the configured default admin account if it doesn't exist.

    Returns:
        The existing or newly created account
    """
    existing = await UserRepository.get_by_email(db, config.admin_email)
    if existing is not None:
        return existing

    account = await UserRepository.create(
        db,
        full_name=config.admin_full_name,
        email=config.admin_email,
        password_hash=hash_password(config.admin_password),
    )
    logger.info(f"Seeded default admin account: {account.email}")
    return account
