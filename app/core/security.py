"""Password hashing and JWT creation/verification for authentication."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

import bcrypt
import jwt

from app.core.config import settings
from app.models.user import Role

# Bcrypt cost factor (log2 rounds).
BCRYPT_ROUNDS = 12

# bcrypt only considers the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72

AuthErrorKind = Literal["missing", "malformed", "expired"]

_AUTH_ERROR_MESSAGES: dict[str, str] = {
    "missing": "Not authenticated",
    "malformed": "Invalid token",
    "expired": "Token has expired",
}


class AuthError(Exception):
    """Raised when a bearer token is missing, cannot be verified, or has expired."""

    def __init__(self, kind: AuthErrorKind) -> None:
        self.kind = kind
        self.message = _AUTH_ERROR_MESSAGES[kind]
        super().__init__(self.message)


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified token."""

    subject_id: str
    role: Role


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never match."""
    if not hashed:
        return False
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def issue_token(
    subject_id: str | int,
    role: Role,
    secret: str,
    ttl_hours: int,
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> str:
    """Sign a token with sub, role, iat and exp = iat + ttl_hours."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(subject_id),
        "role": Role(role).value,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=ttl_hours),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_token(
    token: str | None,
    secret: str,
    algorithm: str = "HS256",
    now: datetime | None = None,
) -> TokenClaims:
    """
    Verify signature and expiry and return the asserted identity.

    Raises AuthError("missing") for no token, AuthError("expired") once now >= exp,
    and AuthError("malformed") for anything that does not parse or validate.
    """
    if token is None or not token.strip():
        raise AuthError("missing")
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "role", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthError("expired") from e
    except jwt.PyJWTError as e:
        raise AuthError("malformed") from e

    current = now or datetime.now(UTC)
    if current.timestamp() >= payload["exp"]:
        raise AuthError("expired")

    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        raise AuthError("malformed")
    try:
        role = Role(payload.get("role"))
    except ValueError as e:
        raise AuthError("malformed") from e
    return TokenClaims(subject_id=sub, role=role)


def create_access_token(sub: str | int, role: Role) -> str:
    """Issue a token using the process-wide secret, algorithm and TTL."""
    return issue_token(
        sub,
        role,
        settings.JWT_SECRET.get_secret_value(),
        settings.JWT_EXPIRE_HOURS,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str | None) -> TokenClaims:
    """Verify a token using the process-wide secret and algorithm. Raises AuthError."""
    return verify_token(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )
