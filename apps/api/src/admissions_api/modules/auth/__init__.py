"""Authentication module."""

from admissions_api.modules.auth.router import router
from admissions_api.modules.auth.schemas import LoginRequest, LoginResponse, SignupRequest

__all__ = ["router", "LoginRequest", "LoginResponse", "SignupRequest"]
