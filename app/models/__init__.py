"""ORM models; import from here so Base.metadata sees every table."""

from app.models.base import Base
from app.models.user import AccountStatus, Role, User

__all__ = ["AccountStatus", "Base", "Role", "User"]
