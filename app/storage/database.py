"""Database setup and management.

Supports both SQLite (development) and PostgreSQL (production):
- SQLite: Local development and tests, file-based
- PostgreSQL: Production, hosted

Database selection is automatic based on DATABASE_URL environment variable.
"""

import aiosqlite
import logging
from pathlib import Path
from typing import Optional, Protocol, Any
from contextlib import asynccontextmanager

from app.config import get_settings

logger = logging.getLogger(__name__)

# Relative SQLITE_PATH values are resolved against the project root
ROOT_DIR = Path(__file__).parent.parent.parent


class DatabaseProtocol(Protocol):
    """Protocol for database implementations."""

    async def initialize(self) -> None:
        """Initialize database tables."""
        ...

    def connection(self):
        """Get database connection context manager."""
        ...


def resolve_sqlite_path(raw_path: str) -> Path:
    """Turn the configured SQLITE_PATH into an absolute path."""
    path = Path(raw_path)
    if not path.is_absolute():
        path = ROOT_DIR / path
    return path


class Database:
    """Async SQLite database manager."""

    def __init__(self, db_path: Optional[Path] = None):
        """Initialize database.

        Args:
            db_path: Path to SQLite database file. Defaults to SQLITE_PATH.
        """
        self.db_path = db_path or resolve_sqlite_path(get_settings().sqlite_path)
        self._ensure_data_dir()

    def _ensure_data_dir(self) -> None:
        """Create data directory if it doesn't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @asynccontextmanager
    async def connection(self):
        """Get database connection context manager.

        Usage:
            async with db.connection() as conn:
                await conn.execute(...)
        """
        async with aiosqlite.connect(self.db_path) as conn:
            conn.row_factory = aiosqlite.Row
            yield conn

    async def initialize(self) -> None:
        """Create tables if they don't exist."""
        async with self.connection() as conn:
            # Products table - one row per inventory item
            await conn.execute("""
                CREATE TABLE IF NOT EXISTS products (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    quantity INTEGER NOT NULL,
                    price REAL NOT NULL,
                    company TEXT NOT NULL,
                    type TEXT NOT NULL,
                    description TEXT DEFAULT '',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            # Export filters on company
            await conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_products_company
                ON products (company)
            """)

            # Users table - login accounts
            await conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    username TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    name TEXT NOT NULL,
                    role TEXT DEFAULT 'user',
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            await conn.commit()
            logger.info(f"Database initialized at {self.db_path}")


# Singleton instances
_sqlite_db: Optional[Database] = None
_postgres_db: Optional[Any] = None  # Lazy import to avoid circular deps


def get_sqlite_database() -> Database:
    """Get the singleton SQLite database instance."""
    global _sqlite_db
    if _sqlite_db is None:
        _sqlite_db = Database()
    return _sqlite_db


def get_database():
    """Get the appropriate database based on configuration.

    Returns SQLite for development, PostgreSQL for production.
    """
    settings = get_settings()

    if settings.use_postgres:
        global _postgres_db
        if _postgres_db is None:
            from app.storage.postgres import get_postgres_database
            _postgres_db = get_postgres_database()
        return _postgres_db
    else:
        return get_sqlite_database()


async def init_database() -> None:
    """Initialize the database (call on app startup).

    Automatically selects SQLite or PostgreSQL based on configuration.
    """
    settings = get_settings()
    db = get_database()
    await db.initialize()

    if settings.use_postgres:
        logger.info("Using PostgreSQL database (production)")
    else:
        logger.info("Using SQLite database (development)")


async def close_database() -> None:
    """Release database resources (call on app shutdown)."""
    if get_settings().use_postgres:
        from app.storage.postgres import close_pool
        await close_pool()


def database_backend() -> str:
    """Name of the configured backend, for health reporting."""
    return "postgres" if get_settings().use_postgres else "sqlite"
