"""
Provision an Admin Account

There is no registration endpoint; operators create admins with this script.

Usage:
    python scripts/create_admin.py ops ops@example.com --role super-admin
    python scripts/create_admin.py ops --reset-password
    python scripts/create_admin.py ops --deactivate
"""
import argparse
import getpass
import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.estatehub.db.models import AdminRole
from src.estatehub.db.repository import AdminRepository
from src.estatehub.db.session import get_db_session
from src.estatehub.utils.logger import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


def prompt_password() -> str:
    """Read and confirm a password without echoing it."""
    password = getpass.getpass("Password: ")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise SystemExit(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if getpass.getpass("Confirm password: ") != password:
        raise SystemExit("Passwords do not match")
    return password


def main():
    parser = argparse.ArgumentParser(description="Create or manage an EstateHub admin")
    parser.add_argument("username")
    parser.add_argument("email", nargs="?", help="Required when creating an admin")
    parser.add_argument(
        "--role",
        choices=[role.value for role in AdminRole],
        default=AdminRole.ADMIN.value,
    )
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--reset-password", action="store_true")
    action.add_argument("--deactivate", action="store_true")
    args = parser.parse_args()

    repo = AdminRepository()

    with get_db_session() as session:
        existing = repo.get_by_username(session, args.username)

        if args.reset_password or args.deactivate:
            if not existing:
                raise SystemExit(f"No admin named {args.username!r}")
            if args.deactivate:
                repo.deactivate(session, existing.id)
                logger.info("admin_deactivated", username=args.username)
            else:
                repo.set_password(session, existing.id, prompt_password())
                logger.info("admin_password_reset", username=args.username)
            return

        if existing:
            raise SystemExit(f"Admin {args.username!r} already exists")
        if not args.email:
            parser.error("email is required when creating an admin")

        admin = repo.create_admin(
            session,
            username=args.username,
            email=args.email,
            password=prompt_password(),
            role=AdminRole(args.role),
        )
        logger.info("admin_created", admin_id=admin.id, username=admin.username, role=args.role)


if __name__ == "__main__":
    main()
