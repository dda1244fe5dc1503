"""Persistence for accounts: the only code that queries or writes the users table."""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from app.models.user import AccountStatus, Role, User

# Columns a list may be sorted by; a leading "-" means descending.
SORTABLE_COLUMNS = frozenset({"created_at", "updated_at", "name", "email", "username"})


class DuplicateAccountError(Exception):
    """Raised when a write violates the unique email or username index."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class AccountFilter:
    """List filter: substring search over name/email/username plus exact role/status."""

    search: str | None = None
    role: Role | None = None
    status: AccountStatus | None = None


class AccountStore:
    """Account persistence over one SQLAlchemy session (one per request)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, account_id: int) -> User | None:
        return self.session.get(User, account_id)

    def find_one(self, **filters: Any) -> User | None:
        """First account whose columns equal all given values."""
        return self.session.query(User).filter_by(**filters).first()

    def find_one_excluding(self, account_id: int, **filters: Any) -> User | None:
        """Like find_one, ignoring the account with the given id."""
        return (
            self.session.query(User)
            .filter_by(**filters)
            .filter(User.id != account_id)
            .first()
        )

    def find_by_email_or_username(self, email: str, username: str) -> User | None:
        return (
            self.session.query(User)
            .filter(or_(User.email == email, User.username == username))
            .first()
        )

    def insert(self, account: User) -> User:
        self.session.add(account)
        self._commit()
        self.session.refresh(account)
        return account

    def update_fields(self, account_id: int, fields: dict[str, Any]) -> User | None:
        """Set the given columns on one account. Returns None if it does not exist."""
        account = self.get(account_id)
        if account is None:
            return None
        for name, value in fields.items():
            setattr(account, name, value)
        self._commit()
        self.session.refresh(account)
        return account

    def delete(self, account_id: int) -> bool:
        deleted = (
            self.session.query(User)
            .filter(User.id == account_id)
            .delete(synchronize_session=False)
        )
        self._commit()
        return deleted > 0

    def count(self, account_filter: AccountFilter) -> int:
        return self._filtered(account_filter).count()

    def find_page(
        self,
        account_filter: AccountFilter,
        sort: str = "-created_at",
        skip: int = 0,
        limit: int = 10,
    ) -> list[User]:
        column_name = sort.lstrip("-")
        if column_name not in SORTABLE_COLUMNS:
            raise ValueError(f"Cannot sort accounts by {column_name!r}")
        column = getattr(User, column_name)
        order = column.desc() if sort.startswith("-") else column.asc()
        return (
            self._filtered(account_filter)
            .order_by(order, User.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def _filtered(self, account_filter: AccountFilter) -> Query:
        query = self.session.query(User)
        if account_filter.search:
            pattern = f"%{account_filter.search}%"
            query = query.filter(
                or_(
                    User.name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.username.ilike(pattern),
                )
            )
        if account_filter.role is not None:
            query = query.filter(User.role == account_filter.role)
        if account_filter.status is not None:
            query = query.filter(User.status == account_filter.status)
        return query

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateAccountError("Email or username already in use.") from e
        except SQLAlchemyError:
            self.session.rollback()
            raise
