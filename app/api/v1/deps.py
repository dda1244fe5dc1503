"""Auth gate dependencies: bearer token verification, current user, endpoint role gate."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.security import AuthError, TokenClaims, decode_access_token
from app.models.user import AccountStatus, Role, User
from app.services.account_store import AccountStore
from app.services.accounts import AccountDirectory

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_account_directory(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AccountDirectory:
    """Dependency: AccountDirectory bound to this request's session."""
    return AccountDirectory(AccountStore(db), settings)


def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Dependency: require a valid Bearer JWT. Raises 401 if missing, malformed or expired."""
    token = credentials.credentials if credentials is not None else None
    try:
        return decode_access_token(token)
    except AuthError as e:
        raise _unauthorized(e.message) from e


def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: the account named by the token. Raises 401 if it is gone or inactive."""
    try:
        user_id = int(claims.subject_id)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    user = AccountStore(db).get(user_id)
    if user is None:
        raise _unauthorized("User not found")
    if user.status is not AccountStatus.ACTIVE:
        raise _unauthorized("Account is inactive")
    return user


def require_roles(*allowed: Role) -> Callable[[User], User]:
    """Build a dependency that rejects (403) actors whose role is not in `allowed`."""
    allowed_set = frozenset(allowed)

    def dependency(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        if current_user.role not in allowed_set:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role for this endpoint",
            )
        return current_user

    return dependency


require_admin = require_roles(Role.ADMIN)
