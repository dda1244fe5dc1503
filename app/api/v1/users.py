"""Account management (admin role required; each mutation is further gated by role policy)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.v1.deps import get_account_directory, require_admin
from app.api.v1.errors import to_http_exception
from app.models.user import AccountStatus, Role, User
from app.schemas.auth import RegisterRequest
from app.schemas.users import AccountResponse, AccountsPage, UpdateAccountRequest
from app.services.accounts import AccountDirectory, AccountError

router = APIRouter()


@router.get("", response_model=AccountsPage)
def list_users(
    _admin: Annotated[User, Depends(require_admin)],
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
    page: int = Query(default=1, description="Page number (1-based)"),
    limit: int = Query(default=10, description="Items per page (max 100)"),
    search: str | None = Query(default=None, max_length=100),
    role: Role | None = None,
    status_filter: AccountStatus | None = Query(default=None, alias="status"),
) -> AccountsPage:
    """List accounts newest first, with optional search and role/status filters."""
    try:
        result = directory.list_accounts(
            page=page, limit=limit, search=search, role=role, status=status_filter
        )
    except AccountError as e:
        raise to_http_exception(e) from e
    return AccountsPage(
        data=[AccountResponse.model_validate(a) for a in result.data],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get("/{user_id}", response_model=AccountResponse)
def get_user(
    user_id: int,
    _admin: Annotated[User, Depends(require_admin)],
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
) -> AccountResponse:
    try:
        account = directory.get_account(user_id)
    except AccountError as e:
        raise to_http_exception(e) from e
    return AccountResponse.model_validate(account)


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: RegisterRequest,
    actor: Annotated[User, Depends(require_admin)],
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
) -> AccountResponse:
    """Create an account. Admins may create managers and staff, never other admins."""
    try:
        account = directory.create_account(actor, body)
    except AccountError as e:
        raise to_http_exception(e) from e
    return AccountResponse.model_validate(account)


@router.put("/{user_id}", response_model=AccountResponse)
def update_user(
    user_id: int,
    body: UpdateAccountRequest,
    actor: Annotated[User, Depends(require_admin)],
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
) -> AccountResponse:
    """Partially update an account; only fields present in the body change."""
    try:
        account = directory.update_account(actor, user_id, body)
    except AccountError as e:
        raise to_http_exception(e) from e
    return AccountResponse.model_validate(account)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    actor: Annotated[User, Depends(require_admin)],
    directory: Annotated[AccountDirectory, Depends(get_account_directory)],
) -> Response:
    """Delete an account. Admin and manager accounts cannot be deleted."""
    try:
        directory.delete_account(actor, user_id)
    except AccountError as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
