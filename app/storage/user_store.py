"""User account storage.

Passwords are only ever stored as bcrypt hashes. Accounts are managed
from the command line (scripts/manage_users.py); the API only reads them.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from app.auth.models import Role
from app.auth.security import hash_password
from app.storage.database import get_database

logger = logging.getLogger(__name__)


class UserExistsError(Exception):
    """Raised when a username is already taken."""


class InvalidRoleError(ValueError):
    """Raised for a role outside admin/user/viewer."""


class UserAccount(BaseModel):
    """Stored account data model."""

    id: str
    username: str
    password_hash: str
    name: str
    role: str = Role.USER.value
    created_at: str
    updated_at: str


def normalize_role(role: Optional[str]) -> str:
    """Lower-case and validate a role, defaulting to ``user``."""
    value = (role or Role.USER.value).strip().lower()
    if value not in {r.value for r in Role}:
        raise InvalidRoleError(f"Unknown role '{role}' (expected admin, user or viewer)")
    return value


class UserStore:
    """Manages login accounts."""

    def __init__(self):
        """Initialize user store."""
        self.db = get_database()

    async def create_user(
        self,
        username: str,
        password: str,
        name: str,
        role: str = Role.USER.value,
    ) -> UserAccount:
        """Create an account.

        Args:
            username: Unique login name
            password: Plaintext password, hashed before storage
            name: Display name
            role: admin, user or viewer

        Returns:
            The stored UserAccount

        Raises:
            UserExistsError: If the username is taken
            InvalidRoleError: If the role is not recognised
            PasswordTooLongError: If the password is longer than bcrypt accepts
        """
        role = normalize_role(role)
        if await self.get_by_username(username):
            raise UserExistsError(f'User "{username}" already exists')

        user_id = str(uuid.uuid4())
        now = datetime.utcnow().isoformat()
        password_hash = hash_password(password)

        async with self.db.connection() as conn:
            await conn.execute(
                """
                INSERT INTO users (id, username, password_hash, name, role, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (user_id, username, password_hash, name, role, now, now),
            )
            await conn.commit()

        logger.info(f"Created user {username} ({role})")

        return UserAccount(
            id=user_id,
            username=username,
            password_hash=password_hash,
            name=name,
            role=role,
            created_at=now,
            updated_at=now,
        )

    async def get_by_username(self, username: str) -> Optional[UserAccount]:
        """Look up an account by login name."""
        async with self.db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users WHERE username = ?",
                (username,),
            )
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def get_by_id(self, user_id: str) -> Optional[UserAccount]:
        """Look up an account by id."""
        async with self.db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users WHERE id = ?",
                (user_id,),
            )
            row = await cursor.fetchone()
            return self._row_to_user(row) if row else None

    async def list_users(self) -> List[UserAccount]:
        """All accounts, oldest first."""
        async with self.db.connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users ORDER BY created_at, username",
            )
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    async def delete_user(self, username: str) -> bool:
        """Delete an account.

        Returns:
            True if deleted, False if not found
        """
        async with self.db.connection() as conn:
            cursor = await conn.execute(
                "DELETE FROM users WHERE username = ?",
                (username,),
            )
            await conn.commit()
            deleted = cursor.rowcount > 0

        if deleted:
            logger.info(f"Deleted user {username}")
        return deleted

    async def set_password(self, username: str, password: str) -> bool:
        """Replace an account's password.

        Returns:
            True if updated, False if the account does not exist

        Raises:
            PasswordTooLongError: If the password is longer than bcrypt accepts
        """
        now = datetime.utcnow().isoformat()

        async with self.db.connection() as conn:
            cursor = await conn.execute(
                "UPDATE users SET password_hash = ?, updated_at = ? WHERE username = ?",
                (hash_password(password), now, username),
            )
            await conn.commit()
            updated = cursor.rowcount > 0

        if updated:
            logger.info(f"Password changed for user {username}")
        return updated

    def _row_to_user(self, row) -> UserAccount:
        """Convert database row to UserAccount object."""
        return UserAccount(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            name=row["name"],
            role=row["role"] or Role.USER.value,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )


# Singleton instance
_store: Optional[UserStore] = None


def get_user_store() -> UserStore:
    """Get the singleton user store instance."""
    global _store
    if _store is None:
        _store = UserStore()
    return _store
