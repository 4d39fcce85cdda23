"""Authentication router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from admissions_api.core.auth import AdminUser, get_current_admin_user
from admissions_api.core.database import get_db
from admissions_api.core.exceptions import internal_error, to_http_exception
from admissions_api.modules.auth import service
from admissions_api.modules.auth.schemas import (
    CurrentAdminResponse,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
)
from admissions_api.modules.auth.service import AuthServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Email or password missing"},
        401: {"description": "Invalid email or password"},
    },
)
async def login(
    credentials: LoginRequest | None = None,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """
    Authenticate an admin and return an access token.

    Args:
        credentials: Email (or username) and password
        db: Database session

    Returns:
        Access token, its lifetime in seconds, and the admin's name and email

    Raises:
        HTTPException 400: Missing email or password
        HTTPException 401: Invalid credentials
    """
    try:
        return await service.login(db, credentials or LoginRequest())

    except AuthServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error during login: {e}")
        raise internal_error() from e


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing fields, short password, or email already registered"},
        403: {"description": "Signup disabled"},
    },
)
async def signup(
    data: SignupRequest | None = None,
    db: AsyncSession = Depends(get_db),
) -> SignupResponse:
    """
    Create a new admin account.

    Raises:
        HTTPException 400: Validation failure or duplicate email
        HTTPException 403: Signup disabled by configuration
    """
    try:
        response = await service.signup(db, data or SignupRequest())
        logger.info(f"Admin account created: {response.user.email}")
        return response

    except AuthServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error during signup: {e}")
        raise internal_error() from e


@router.get(
    "/me",
    response_model=CurrentAdminResponse,
    responses={401: {"description": "Unauthorized - invalid or missing token"}},
)
async def current_admin(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> CurrentAdminResponse:
    """Return the profile of the admin that owns the token."""
    account = await service.get_account(db, admin.id)
    if account is None:
        # Token is valid but the account no longer exists
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Unauthorized", "code": "UNAUTHORIZED"},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return CurrentAdminResponse.model_validate(account)
