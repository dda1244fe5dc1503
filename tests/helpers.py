"""Shared test helpers: in-memory SQLite sessions, seeded accounts, API client wiring."""

from collections.abc import Generator
from datetime import UTC, datetime
from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token, hash_password
from app.models import Base, User
from app.models.user import AccountStatus, Role

TEST_PASSWORD = "secret123"

# bcrypt's minimum cost; patched in per test case to keep the suite fast.
FAST_BCRYPT_ROUNDS = 4


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with the users table; StaticPool shares it across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine, tables=[User.__table__])
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def make_settings(secret: str = "test-secret", expire_hours: int = 24) -> MagicMock:
    settings = MagicMock()
    settings.JWT_SECRET = SecretStr(secret)
    settings.JWT_ALGORITHM = "HS256"
    settings.JWT_EXPIRE_HOURS = expire_hours
    return settings


def add_account(
    session: Session,
    username: str,
    role: Role = Role.STAFF,
    status: AccountStatus = AccountStatus.ACTIVE,
    password: str = TEST_PASSWORD,
    **fields: object,
) -> User:
    """Insert an account directly, bypassing the role policy."""
    now = datetime.now(UTC)
    name = fields.pop("name", username.title())
    email = fields.pop("email", f"{username}@venue.io")
    account = User(
        name=name,
        email=email,
        username=username,
        password_hash=hash_password(password),
        role=role,
        status=status,
        created_at=now,
        updated_at=now,
        **fields,
    )
    session.add(account)
    session.commit()
    session.refresh(account)
    return account


def make_client(session_factory: sessionmaker) -> TestClient:
    """TestClient whose get_db yields sessions from session_factory. Lifespan is not run."""
    from app.core.database import get_db
    from app.main import app

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def clear_overrides() -> None:
    from app.main import app

    app.dependency_overrides.clear()


def auth_headers(account: User) -> dict[str, str]:
    """Bearer header for account, signed with the process-wide settings."""
    token = create_access_token(sub=account.id, role=account.role)
    return {"Authorization": f"Bearer {token}"}
