"""
Authentication and Authorization Module

Provides the FastAPI dependency that guards every admin endpoint.

The gate accepts `Authorization: Bearer <token>` where <token> is a signed,
unexpired access token issued by POST /admin/login. Every failure
(missing header, other scheme, malformed value, bad signature, expiry,
wrong token type) is reported the same way: 401 Unauthorized.
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from admissions_api.core.security import ACCESS_TOKEN_TYPE, decode_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header yields our uniform 401, not FastAPI's default
security = HTTPBearer(
    auto_error=False,
    description="Access token from POST /api/admin/login",
)


@dataclass
class AdminUser:
    """
    Represents an authenticated admin.

    Populated from token claims after validation.
    """

    id: int
    email: str
    name: str | None = None

    def __str__(self) -> str:
        return f"AdminUser(id={self.id}, email={self.email})"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error": "Unauthorized",
            "code": "UNAUTHORIZED",
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


def authenticate_token(token: str) -> AdminUser:
    """
    Validate an access token and build the AdminUser from its claims.

    Raises:
        HTTPException 401: For any invalid, expired or malformed token
    """
    payload = decode_token(token)
    if payload is None:
        logger.warning("Rejected invalid or expired access token")
        raise _unauthorized()

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        logger.warning(f"Rejected token of type {payload.get('type')!r}")
        raise _unauthorized()

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        logger.warning("Rejected token with invalid 'sub' claim")
        raise _unauthorized() from None

    return AdminUser(
        id=user_id,
        email=payload.get("email", ""),
        name=payload.get("name"),
    )


async def get_current_admin_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> AdminUser:
    """
    FastAPI dependency that validates the bearer token and returns the admin.

    Usage:
        @router.get("/admin/endpoint")
        async def admin_endpoint(admin: AdminUser = Depends(get_current_admin_user)):
            ...

    Raises:
        HTTPException 401: If the header is missing/malformed or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        logger.warning("Rejected request without a bearer token")
        raise _unauthorized()

    user = authenticate_token(credentials.credentials)
    logger.debug(f"Authenticated admin: {user.id} ({user.email})")
    return user


__all__ = [
    "AdminUser",
    "authenticate_token",
    "get_current_admin_user",
]
