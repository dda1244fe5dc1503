"""ORM model for venue staff accounts (auth and RBAC)."""

import enum

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Enum, Integer, String, Text

from app.models.base import Base


class Role(str, enum.Enum):
    """Account role. Hierarchy: admin > manager > staff."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]


_ROLE_RANKS = {Role.ADMIN: 3, Role.MANAGER: 2, Role.STAFF: 1}


class AccountStatus(str, enum.Enum):
    """Inactive accounts cannot log in or use previously issued tokens."""

    ACTIVE = "active"
    INACTIVE = "inactive"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class User(Base):
    """
    Account for JWT authentication and role-based access control.

    email and username are unique; password_hash is never serialized outward.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("updated_at >= created_at", name="ck_users_updated_after_created"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=Role.STAFF,
    )
    status = Column(
        Enum(
            AccountStatus,
            name="user_status",
            native_enum=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=AccountStatus.ACTIVE,
    )
    phone = Column(String(50), nullable=True)
    department = Column(String(100), nullable=True)
    bio = Column(Text, nullable=True)
    profile_image = Column(String(1024), nullable=True)
    social_links = Column(JSON, nullable=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
