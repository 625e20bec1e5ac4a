"""
Create a user (e.g. the first administrator). Run from project root:
  python -m rollcall.scripts.create_user USERNAME PASSWORD [role] [--full-name NAME] [--with-defaults]
Example:
  python -m rollcall.scripts.create_user faisalhassan your-secure-password superadmin --full-name "Faisal Hassan"
"""
import argparse
import sys

from sqlalchemy import func

from rollcall.core.database import SessionLocal
from rollcall.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    hash_password,
    normalize_username,
)
from rollcall.models.user import User
from rollcall.schemas.permissions import Role
from rollcall.services.catalog import defaults_for


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Rollcall user (no registration UI).")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.STANDARD_USER.value,
        choices=[r.value for r in Role],
    )
    parser.add_argument("--full-name", default="", help="Display name shown in audit entries")
    parser.add_argument(
        "--with-defaults",
        action="store_true",
        help="Seed an explicit permission set from the role defaults (otherwise the role fallback applies)",
    )
    args = parser.parse_args()

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    role = Role(args.role)
    db = SessionLocal()
    try:
        existing = db.query(User).filter(func.lower(User.username) == normalize_username(username)).first()
        if existing:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            password_hash=hash_password(args.password),
            full_name=args.full_name.strip(),
            role=role.value,
            permissions=[p.value for p in defaults_for(role)] if args.with_defaults else None,
            is_blocked=False,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{username}' with role '{role.value}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
