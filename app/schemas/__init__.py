"""Request and response bodies for the v1 API."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    ProfilePermissions,
    ProfileResponse,
    RegisterRequest,
)
from app.schemas.common import ErrorResponse
from app.schemas.health import HealthResponse
from app.schemas.users import AccountResponse, AccountsPage, UpdateAccountRequest

__all__ = [
    "AccountResponse",
    "AccountsPage",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "ProfilePermissions",
    "ProfileResponse",
    "RegisterRequest",
    "UpdateAccountRequest",
]
