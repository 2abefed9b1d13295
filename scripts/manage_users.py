#!/usr/bin/env python3
"""
Manage inventory login accounts.

Accounts are not created over HTTP; use this script against the configured
database (SQLite by default, PostgreSQL when DATABASE_URL is set).

Usage:
    python scripts/manage_users.py add admin --name "Administrator" --role admin
    python scripts/manage_users.py add clerk --name "Front Desk" --role viewer --password s3cret
    python scripts/manage_users.py list
    python scripts/manage_users.py passwd clerk
    python scripts/manage_users.py delete clerk --yes

Roles:
    admin, user  - may add, edit and delete products
    viewer       - read-only (may still export)
"""

import argparse
import asyncio
import getpass
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.auth.models import Role
from app.auth.security import PasswordTooLongError
from app.storage.database import init_database, close_database
from app.storage.user_store import (
    InvalidRoleError,
    UserExistsError,
    get_user_store,
)

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def prompt_password(supplied: Optional[str]) -> Optional[str]:
    """Use the --password value or ask twice on the terminal."""
    if supplied:
        return supplied
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Confirm password: "):
        print("Passwords do not match")
        return None
    return password


async def add_user(args: argparse.Namespace) -> int:
    password = prompt_password(args.password)
    if not args.username or not password or not args.name:
        print("Username, password and name are required")
        return 1

    try:
        user = await get_user_store().create_user(
            username=args.username,
            password=password,
            name=args.name,
            role=args.role,
        )
    except (UserExistsError, InvalidRoleError, PasswordTooLongError) as e:
        print(e)
        return 1

    print(f'User "{user.username}" added ({user.name}, role: {user.role})')
    return 0


async def list_users(args: argparse.Namespace) -> int:
    users = await get_user_store().list_users()
    if not users:
        print("No users found.")
        return 0

    print("-" * 80)
    print(f"{'USERNAME':<20}{'NAME':<30}{'ROLE':<15}CREATED")
    print("-" * 80)
    for user in users:
        print(f"{user.username:<20}{user.name:<30}{user.role:<15}{user.created_at[:10]}")
    print("-" * 80)
    return 0


async def delete_user(args: argparse.Namespace) -> int:
    store = get_user_store()
    if not await store.get_by_username(args.username):
        print(f'User "{args.username}" not found')
        return 1

    if not args.yes:
        try:
            answer = input(f'Delete "{args.username}"? (yes/no): ')
        except EOFError:
            answer = ""
        if answer.strip().lower() != "yes":
            print("Deletion cancelled.")
            return 1

    await store.delete_user(args.username)
    print(f'User "{args.username}" deleted')
    return 0


async def change_password(args: argparse.Namespace) -> int:
    store = get_user_store()
    if not await store.get_by_username(args.username):
        print(f'User "{args.username}" not found')
        return 1

    password = prompt_password(args.password)
    if not password:
        print("Password is required")
        return 1

    try:
        await store.set_password(args.username, password)
    except PasswordTooLongError as e:
        print(e)
        return 1
    print(f'Password for "{args.username}" updated')
    return 0


COMMANDS = {
    "add": add_user,
    "list": list_users,
    "delete": delete_user,
    "passwd": change_password,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage inventory login accounts")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Add a new user")
    add.add_argument("username")
    add.add_argument("--name", required=True, help="Display name")
    add.add_argument(
        "--role",
        default=Role.USER.value,
        type=str.lower,
        choices=[role.value for role in Role],
        help="Account role (default: user)",
    )
    add.add_argument("--password", help="Password (prompted when omitted)")

    subparsers.add_parser("list", help="List all users")

    delete = subparsers.add_parser("delete", help="Delete a user")
    delete.add_argument("username")
    delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    passwd = subparsers.add_parser("passwd", help="Change a user's password")
    passwd.add_argument("username")
    passwd.add_argument("--password", help="New password (prompted when omitted)")

    return parser


async def run(args: argparse.Namespace) -> int:
    await init_database()
    try:
        return await COMMANDS[args.command](args)
    finally:
        await close_database()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
