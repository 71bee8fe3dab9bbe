"""
Create a user, including administrators (the API never grants is_admin). Run from project root:
  python -m warden.scripts.create_user USERNAME PASSWORD [--admin] [--email ADDR]
Example:
  python -m warden.scripts.create_user root your-secure-password --admin
"""
import argparse
import logging
import sys

from dotenv import load_dotenv

from warden.core.context import build_context
from warden.core.errors import ApiError
from warden.core.security import USERNAME_MAX_LEN, password_meets_requirements
from warden.core.log import configure_logging
from warden.services import users

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Warden user (admins can only be created here).")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars, stored lowercased)")
    parser.add_argument("password", help="Password")
    parser.add_argument("--admin", action="store_true", help="Grant administrator privilege")
    parser.add_argument("--email", default=None, help="Optional email address")
    args = parser.parse_args(argv)

    context = build_context()
    configure_logging(context.settings.LOG_LEVEL)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not password_meets_requirements(args.password, context.settings.PASSWORD_MIN_LEN):
        print(
            f"Password must be at least {context.settings.PASSWORD_MIN_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = context.session_factory()
    try:
        if users.username_exists(db, username):
            print(f"User '{username.lower()}' already exists.", file=sys.stderr)
            return 1
        user = users.create_user(db, username, args.password, args.email, is_admin=args.admin)
        role = "admin" if user.is_admin else "user"
        print(f"Created {role} '{user.username}' with id {user.user_id}.")
        return 0
    except ApiError as e:
        logger.error("User creation failed: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    load_dotenv()
    sys.exit(main())
