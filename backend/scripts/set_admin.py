#!/usr/bin/env python3
"""
Script to set a user as admin in the database.

The API never changes roles; this direct store edit is the only way an
account becomes an admin.

Run from the backend/ directory (or with the project pip-installed):
    python scripts/set_admin.py <email>
    python scripts/set_admin.py --revoke <email>
    python scripts/set_admin.py --list

Examples:
    python scripts/set_admin.py admin@example.com
"""

import argparse
import sys

# Add parent directory to path for imports
sys.path.insert(0, ".")

from resource_hub.database.mongo import get_database
from resource_hub.entities.enums import Role
from resource_hub.repositories.user import UserRepository


def list_users(repo: UserRepository) -> None:
    """List all users with their roles."""
    print("\nCurrent users:")
    print("-" * 60)
    for user in repo.list_all():
        badge = "ADMIN  " if user.is_admin else "learner"
        print(f"  {badge} | {user.email} | {user.name}")
    print("-" * 60)


def main():
    parser = argparse.ArgumentParser(
        description="Promote (or demote) a Learning Resource Hub user"
    )
    parser.add_argument(
        "email",
        nargs="?",
        help="Email address of the user",
    )
    parser.add_argument(
        "--revoke",
        "-r",
        action="store_true",
        help="Set the user back to learner instead of admin",
    )
    parser.add_argument(
        "--list",
        "-l",
        action="store_true",
        help="List all users and their roles",
    )

    args = parser.parse_args()
    repo = UserRepository(get_database())

    if args.list:
        list_users(repo)
        return

    if not args.email:
        parser.print_help()
        print("\nError: Please provide an email")
        sys.exit(1)

    email = args.email.strip().lower()
    role = Role.LEARNER if args.revoke else Role.ADMIN

    if repo.set_role(email, role):
        print(f"Set {email} to {role.value}")
        list_users(repo)
    else:
        print(f"User not found: {email}")
        print("   Make sure the user has registered first.")
        sys.exit(1)


if __name__ == "__main__":
    main()
