"""Public registration and login, and the authenticated profile endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.deps import get_account_directory, get_current_user
from app.api.v1.errors import to_http_exception
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    ProfilePermissions,
    ProfileResponse,
    RegisterRequest,
)
from app.schemas.users import AccountResponse
from app.services.accounts import AccountDirectory, AccountError

router = APIRouter()


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
) -> AccountResponse:
    """Create a new account. Returns 409 if the email or username is taken."""
    try:
        account = directory.register(body)
    except AccountError as e:
        raise to_http_exception(e) from e
    return AccountResponse.model_validate(account)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token and the account.
    Include the token in the Authorization header as: Bearer <token>
    """
    try:
        result = directory.login(body.email, body.password)
    except AccountError as e:
        raise to_http_exception(e) from e
    return LoginResponse(
        token=result.token,
        user=AccountResponse.model_validate(result.account),
    )


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
) -> ProfileResponse:
    """Current account with role display name and capability summary."""
    try:
        profile = directory.get_profile(current_user.id)
    except AccountError as e:
        raise to_http_exception(e) from e
    account = AccountResponse.model_validate(profile.account)
    return ProfileResponse(
        **account.model_dump(),
        join_date=profile.join_date,
        role_display=profile.role_display,
        permissions=ProfilePermissions.model_validate(profile.permissions),
    )
