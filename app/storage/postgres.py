"""PostgreSQL database setup and management.

Provides async PostgreSQL database for production:
- Connection pooling via asyncpg
- Same schema as SQLite so stores run unchanged on either backend
"""

import asyncpg
import logging
import re
from typing import Optional, Any
from contextlib import asynccontextmanager

from app.config import get_settings

logger = logging.getLogger(__name__)

# Connection pool
_pool: Optional[asyncpg.Pool] = None

_PLACEHOLDER = re.compile(r"\?")


async def get_pool() -> asyncpg.Pool:
    """Get or create the connection pool."""
    global _pool
    if _pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise ValueError("DATABASE_URL not configured")

        _pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=1,
            max_size=10,
            command_timeout=60,
            statement_cache_size=0,  # Required behind pgbouncer
        )
        logger.info("PostgreSQL connection pool created")
    return _pool


async def close_pool():
    """Close the connection pool."""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None
        logger.info("PostgreSQL connection pool closed")


@asynccontextmanager
async def get_connection():
    """Get a connection from the pool.

    Usage:
        async with get_connection() as conn:
            await conn.execute(...)
    """
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


async def init_postgres_tables():
    """Create tables if they don't exist (PostgreSQL version)."""
    async with get_connection() as conn:
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS products (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                quantity INTEGER NOT NULL,
                price DOUBLE PRECISION NOT NULL,
                company TEXT NOT NULL,
                type TEXT NOT NULL,
                description TEXT DEFAULT '',
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        await conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_products_company
            ON products (company)
        """)

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

        logger.info("PostgreSQL tables initialized")


class PostgresDatabase:
    """Async PostgreSQL database manager."""

    @asynccontextmanager
    async def connection(self):
        """Get database connection context manager."""
        async with get_connection() as conn:
            yield PostgresConnection(conn)

    async def initialize(self) -> None:
        """Initialize database tables."""
        await init_postgres_tables()


class PostgresCursor:
    """Cursor-like wrapper to mimic aiosqlite cursor behavior for asyncpg."""

    def __init__(self, rows: Optional[list], status: str):
        self._rows = rows or []
        self._status = status
        self._index = 0

    @property
    def rowcount(self) -> int:
        """Number of affected rows, parsed from the command status."""
        # asyncpg returns strings like "DELETE 1", "UPDATE 2", "INSERT 0 1"
        tail = self._status.rsplit(" ", 1)[-1] if self._status else ""
        return int(tail) if tail.isdigit() else 0

    async def fetchone(self) -> Optional[Any]:
        if self._index < len(self._rows):
            row = self._rows[self._index]
            self._index += 1
            return row
        return None

    async def fetchall(self) -> list:
        rows = self._rows[self._index:]
        self._index = len(self._rows)
        return rows


class PostgresConnection:
    """Wrapper for asyncpg connection with the aiosqlite calling convention.

    Stores call ``execute(query, (arg1, arg2))`` with ``?`` placeholders;
    this translates both to what asyncpg expects.
    """

    def __init__(self, conn: asyncpg.Connection):
        self._conn = conn

    async def execute(self, query: str, params: tuple = ()) -> PostgresCursor:
        """Execute a query and return a cursor-like object."""
        pg_query = self._convert_placeholders(query)

        if query.lstrip().upper().startswith("SELECT"):
            rows = await self._conn.fetch(pg_query, *params)
            return PostgresCursor(rows, f"SELECT {len(rows)}")

        status = await self._conn.execute(pg_query, *params)
        return PostgresCursor(None, status)

    async def commit(self):
        """No-op for asyncpg (auto-commit by default)."""

    @staticmethod
    def _convert_placeholders(query: str) -> str:
        """Convert SQLite ? placeholders to PostgreSQL $1, $2, etc."""
        counter = iter(range(1, query.count("?") + 1))
        return _PLACEHOLDER.sub(lambda _: f"${next(counter)}", query)


# Singleton instance
_postgres_db: Optional[PostgresDatabase] = None


def get_postgres_database() -> PostgresDatabase:
    """Get the singleton PostgreSQL database instance."""
    global _postgres_db
    if _postgres_db is None:
        _postgres_db = PostgresDatabase()
    return _postgres_db
