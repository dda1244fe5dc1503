"""Request/response schemas for auth endpoints (register, login, profile)."""

from pydantic import BaseModel, Field

from app.models.user import Role
from app.schemas.users import AccountResponse, SubmittedEmail

# Input limits for account fields; the hasher itself enforces none.
NAME_MIN_LEN = 2
NAME_MAX_LEN = 100
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
PHONE_MAX_LEN = 50
DEPARTMENT_MAX_LEN = 100
BIO_MAX_LEN = 2000


class RegisterRequest(BaseModel):
    """New account payload, shared by POST /auth/register and POST /users."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: SubmittedEmail = Field(..., description="Login email, stored as submitted; unique")
    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role = Field(..., description="admin, manager or staff")
    phone: str | None = Field(default=None, max_length=PHONE_MAX_LEN)
    department: str | None = Field(default=None, max_length=DEPARTMENT_MAX_LEN)
    bio: str | None = Field(default=None, max_length=BIO_MAX_LEN)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255, description="Account email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class LoginResponse(BaseModel):
    """JWT access token and the authenticated account."""

    token: str = Field(..., description="JWT access token; send as Authorization: Bearer <token>")
    user: AccountResponse


class ProfilePermissions(BaseModel):
    """Static capability summary derived from the account's role."""

    model_config = {"from_attributes": True}

    can_manage_users: bool
    can_manage_roles: bool
    can_manage_system: bool
    access_permissions: list[str]


class ProfileResponse(AccountResponse):
    """Account plus role-derived profile data for GET /auth/profile."""

    join_date: str = Field(..., description="Account creation date (YYYY-MM-DD)")
    role_display: str
    permissions: ProfilePermissions
