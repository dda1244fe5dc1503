"""Account directory: registration, login, profile and role-gated account management.

All account mutation goes through AccountDirectory. Every create/update/delete on
another account consults the role policy before touching the store.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from app.core.security import hash_password, issue_token, verify_password
from app.models.user import AccountStatus, Role, User
from app.schemas.auth import RegisterRequest
from app.schemas.users import UpdateAccountRequest
from app.services import role_policy
from app.services.account_store import AccountFilter, AccountStore, DuplicateAccountError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100

INVALID_CREDENTIALS_MESSAGE = "The email or password you entered is incorrect."
INACTIVE_ACCOUNT_MESSAGE = "Your account is currently inactive. Please contact support."
FORBIDDEN_MESSAGE = "Insufficient permissions for this operation."
DUPLICATE_ACCOUNT_MESSAGE = "An account with this email or username already exists."


class AccountError(Exception):
    """Base for account directory failures; routes map subclasses to HTTP status codes."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AccountError):
    """Input is well-formed JSON but not acceptable (e.g. bad list parameters)."""


class ConflictError(AccountError):
    """Email or username already belongs to another account."""


class NotFoundError(AccountError):
    """Target account does not exist."""


class ForbiddenError(AccountError):
    """Role policy denied the operation."""

    def __init__(self, message: str = FORBIDDEN_MESSAGE) -> None:
        super().__init__(message)


class InvalidCredentialsError(AccountError):
    """Unknown email or wrong password; deliberately indistinguishable."""

    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE) -> None:
        super().__init__(message)


class InactiveAccountError(AccountError):
    """Credentials are valid but the account is inactive."""

    def __init__(self, message: str = INACTIVE_ACCOUNT_MESSAGE) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class LoginResult:
    token: str
    account: User


@dataclass(frozen=True)
class ProfileView:
    """Account plus role-derived display name and capabilities."""

    account: User
    join_date: str
    role_display: str
    permissions: role_policy.RoleCapabilities


@dataclass(frozen=True)
class AccountPage:
    data: list[User]
    total: int
    page: int
    limit: int
    total_pages: int


def _now() -> datetime:
    return datetime.now(UTC)


class AccountDirectory:
    """Account lifecycle over an AccountStore, using process settings for token issuance."""

    def __init__(self, store: AccountStore, settings: "Settings") -> None:
        self.store = store
        self.settings = settings

    def register(self, request: RegisterRequest) -> User:
        """Create an account from a public registration. Raises ConflictError on duplicates."""
        account = self._insert_new_account(request)
        logger.info("Registered account id=%s role=%s", account.id, account.role.value)
        return account

    def login(self, email: str, password: str) -> LoginResult:
        """
        Verify credentials and issue a token.

        Unknown email and wrong password raise the same InvalidCredentialsError.
        The last_login stamp is best-effort: a store failure is logged, not raised.
        """
        account = self.store.find_one(email=email)
        if account is None or not verify_password(password, account.password_hash):
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()
        if account.status is not AccountStatus.ACTIVE:
            logger.info("Rejected login for inactive account id=%s", account.id)
            raise InactiveAccountError()

        account = self._record_login(account)
        token = issue_token(
            account.id,
            account.role,
            self.settings.JWT_SECRET.get_secret_value(),
            self.settings.JWT_EXPIRE_HOURS,
            algorithm=self.settings.JWT_ALGORITHM,
        )
        return LoginResult(token=token, account=account)

    def get_profile(self, subject_id: int) -> ProfileView:
        account = self.get_account(subject_id)
        return ProfileView(
            account=account,
            join_date=account.created_at.strftime("%Y-%m-%d"),
            role_display=role_policy.role_display(account.role),
            permissions=role_policy.role_capabilities(account.role),
        )

    def get_account(self, account_id: int) -> User:
        account = self.store.get(account_id)
        if account is None:
            raise NotFoundError("User not found")
        return account

    def list_accounts(
        self,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_LIMIT,
        search: str | None = None,
        role: Role | None = None,
        status: AccountStatus | None = None,
    ) -> AccountPage:
        """Newest-first page of accounts. page/limit below 1 fall back to the defaults."""
        if page < 1:
            page = DEFAULT_PAGE
        if limit < 1:
            limit = DEFAULT_PAGE_LIMIT
        if limit > MAX_PAGE_LIMIT:
            raise ValidationError(f"limit must be at most {MAX_PAGE_LIMIT}")

        account_filter = AccountFilter(
            search=search.strip() if search and search.strip() else None,
            role=role,
            status=status,
        )
        total = self.store.count(account_filter)
        data = self.store.find_page(
            account_filter,
            sort="-created_at",
            skip=(page - 1) * limit,
            limit=limit,
        )
        return AccountPage(
            data=data,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    def create_account(self, actor: User, request: RegisterRequest) -> User:
        """Create an account on behalf of actor. Raises ForbiddenError or ConflictError."""
        if not role_policy.can_create(actor.role, request.role):
            logger.info(
                "Denied create: actor id=%s role=%s target_role=%s",
                actor.id,
                actor.role.value,
                request.role.value,
            )
            raise ForbiddenError()
        account = self._insert_new_account(request)
        logger.info(
            "Account id=%s role=%s created by id=%s",
            account.id,
            account.role.value,
            actor.id,
        )
        return account

    def update_account(
        self, actor: User, target_id: int, patch: UpdateAccountRequest
    ) -> User:
        """Apply the fields present in patch to the target account."""
        target = self.get_account(target_id)
        changes = patch.changes()
        new_role = changes.get("role")
        if not role_policy.can_update(
            actor.role,
            target.role,
            changing_role="role" in changes,
            new_role=new_role,
        ):
            logger.info(
                "Denied update: actor id=%s role=%s target id=%s role=%s",
                actor.id,
                actor.role.value,
                target.id,
                target.role.value,
            )
            raise ForbiddenError()

        email = changes.get("email")
        if email is not None and email != target.email:
            if self.store.find_one_excluding(target.id, email=email) is not None:
                raise ConflictError("Email already in use")
        username = changes.get("username")
        if username is not None and username != target.username:
            if self.store.find_one_excluding(target.id, username=username) is not None:
                raise ConflictError("Username already in use")

        changes["updated_at"] = _now()
        try:
            updated = self.store.update_fields(target.id, changes)
        except DuplicateAccountError as e:
            raise ConflictError(e.message) from e
        if updated is None:
            raise NotFoundError("User not found")
        logger.info(
            "Account id=%s updated by id=%s fields=%s",
            updated.id,
            actor.id,
            sorted(k for k in changes if k != "updated_at"),
        )
        return updated

    def delete_account(self, actor: User, target_id: int) -> None:
        target = self.get_account(target_id)
        if not role_policy.can_delete(actor.role, target.role):
            logger.info(
                "Denied delete: actor id=%s role=%s target id=%s role=%s",
                actor.id,
                actor.role.value,
                target.id,
                target.role.value,
            )
            raise ForbiddenError()
        if not self.store.delete(target.id):
            raise NotFoundError("User not found")
        logger.info("Account id=%s deleted by id=%s", target_id, actor.id)

    def _insert_new_account(self, request: RegisterRequest) -> User:
        if self.store.find_by_email_or_username(request.email, request.username) is not None:
            raise ConflictError(DUPLICATE_ACCOUNT_MESSAGE)
        now = _now()
        account = User(
            name=request.name,
            email=request.email,
            username=request.username,
            password_hash=hash_password(request.password),
            role=request.role,
            status=AccountStatus.ACTIVE,
            phone=request.phone,
            department=request.department,
            bio=request.bio,
            created_at=now,
            updated_at=now,
        )
        try:
            return self.store.insert(account)
        except DuplicateAccountError as e:
            raise ConflictError(DUPLICATE_ACCOUNT_MESSAGE) from e

    def _record_login(self, account: User) -> User:
        now = _now()
        try:
            updated = self.store.update_fields(
                account.id, {"last_login": now, "updated_at": now}
            )
        except (SQLAlchemyError, DuplicateAccountError):
            logger.warning(
                "Could not record last_login for account id=%s", account.id, exc_info=True
            )
            return account
        return updated if updated is not None else account
