"""
Create an account (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user "Venue Admin" admin@venue.io admin your-secure-password admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError as SchemaValidationError

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.logging_config import configure_logging
from app.models.user import Role
from app.schemas.auth import RegisterRequest
from app.services.account_store import AccountStore
from app.services.accounts import AccountDirectory, AccountError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a venue admin account (bypasses role policy).")
    parser.add_argument("name", help="Display name (2-100 chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("username", help="Username (3-50 chars)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.ADMIN.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    try:
        request = RegisterRequest(
            name=args.name.strip(),
            email=args.email.strip(),
            username=args.username.strip(),
            password=args.password,
            role=Role(args.role),
        )
    except SchemaValidationError as e:
        print(f"Invalid account data: {e.errors()[0]['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        account = AccountDirectory(AccountStore(db), settings).register(request)
    except AccountError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created account '{account.username}' with role '{account.role.value}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
