"""
Create a user (e.g. the first admin). Run from project root:
  python -m catalog_api.scripts.create_user EMAIL USERNAME PASSWORD [--admin]
Example:
  python -m catalog_api.scripts.create_user admin@example.com admin your-secure-password --admin
"""
import argparse
import sys

from catalog_api.api.v1.dependencies import get_token_manager
from catalog_api.core.config import get_settings
from catalog_api.core.database import create_db_engine, create_session_factory
from catalog_api.core.errors import DomainError
from catalog_api.repositories import UserRepository
from catalog_api.services.auth import AuthService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Catalog API user account.")
    parser.add_argument("email", help="Email address (login ID)")
    parser.add_argument("username", help="Username (3-50 chars)")
    parser.add_argument("password", help="Password (at least 8 chars)")
    parser.add_argument("--first-name", default="")
    parser.add_argument("--last-name", default="")
    parser.add_argument("--admin", action="store_true", help="Grant admin access")
    args = parser.parse_args(argv)

    settings = get_settings()
    db = create_session_factory(create_db_engine(settings))()
    try:
        users = UserRepository(db)
        service = AuthService(users, get_token_manager(), bcrypt_rounds=settings.BCRYPT_ROUNDS)
        try:
            user = service.register(
                email=args.email.strip(),
                username=args.username.strip(),
                password=args.password,
                first_name=args.first_name,
                last_name=args.last_name,
            )
        except DomainError as e:
            print(f"Could not create user: {e.message}", file=sys.stderr)
            return 1
        if args.admin:
            users.update(user, {"is_admin": True})
        role = "admin" if args.admin else "user"
        print(f"Created {role} '{user.username}' (id={user.id}).")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
