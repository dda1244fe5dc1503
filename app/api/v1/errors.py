"""Translate account directory errors into HTTP responses."""

from fastapi import HTTPException, status

from app.services.accounts import (
    AccountError,
    ConflictError,
    ForbiddenError,
    InactiveAccountError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR: dict[type[AccountError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    InactiveAccountError: status.HTTP_401_UNAUTHORIZED,
}


def to_http_exception(error: AccountError) -> HTTPException:
    status_code = _STATUS_BY_ERROR.get(type(error), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=status_code, detail=error.message)
