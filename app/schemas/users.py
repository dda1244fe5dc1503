"""Schemas for account management: public projection, update patch, list page."""

from datetime import datetime
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field, model_validator

from app.models.user import AccountStatus, Role

EMAIL_MAX_LEN = 255

# Patch fields that may be omitted but never explicitly cleared.
NON_NULLABLE_PATCH_FIELDS = ("name", "email", "username", "role", "status")


def _check_email(value: str) -> str:
    """Reject invalid addresses but keep the submitted spelling; login matches it exactly."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return value


SubmittedEmail = Annotated[str, Field(max_length=EMAIL_MAX_LEN), AfterValidator(_check_email)]


class AccountResponse(BaseModel):
    """Account as returned to clients (no password hash)."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    username: str
    role: Role
    status: AccountStatus
    phone: str | None = None
    department: str | None = None
    bio: str | None = None
    profile_image: str | None = None
    social_links: dict[str, str] | None = None
    last_login: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UpdateAccountRequest(BaseModel):
    """
    Partial update for PUT /users/{id}.

    Only fields present in the request body are applied. Optional profile fields
    (phone, department, bio, profile_image, social_links) may be cleared with null;
    identity fields, role and status may not.
    """

    name: str | None = Field(default=None, min_length=2, max_length=100)
    email: SubmittedEmail | None = None
    username: str | None = Field(default=None, min_length=3, max_length=50)
    phone: str | None = Field(default=None, max_length=50)
    department: str | None = Field(default=None, max_length=100)
    bio: str | None = Field(default=None, max_length=2000)
    profile_image: str | None = Field(default=None, max_length=1024)
    social_links: dict[str, str] | None = None
    role: Role | None = None
    status: AccountStatus | None = None

    @model_validator(mode="after")
    def reject_cleared_required_fields(self) -> "UpdateAccountRequest":
        for name in NON_NULLABLE_PATCH_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, object]:
        """Fields explicitly sent by the client, with their values."""
        return self.model_dump(exclude_unset=True)


class AccountsPage(BaseModel):
    """Paginated list envelope for GET /users."""

    data: list[AccountResponse]
    total: int
    page: int
    limit: int
    total_pages: int
