"""
Database engine and session management for FastAPI.

The `Database` handle owns the async engine and its session factory.
It is constructed explicitly (app factory, seeder CLI, tests), stored on
`app.state.db`, and disposed when the application shuts down.

SQLite connections are tuned for concurrent reads:
- WAL mode via aiosqlite
- busy_timeout instead of immediate lock failures
- Foreign key enforcement (required for ON DELETE CASCADE)
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy import event, make_url, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

logger = logging.getLogger(__name__)


def _get_engine_options(database_url: str, is_production: bool = False) -> dict:
    """
    Get engine options based on database type.
    SQLite requires special handling for async and concurrency.
    """
    is_sqlite = database_url.startswith("sqlite")

    options = {
        "echo": False,
    }

    if is_sqlite:
        # StaticPool keeps a single shared connection for in-memory databases,
        # otherwise every new connection would see an empty database
        if ":memory:" in database_url:
            options["poolclass"] = StaticPool
            options["connect_args"] = {"check_same_thread": False}
        else:
            options["poolclass"] = NullPool
    elif not is_production:
        options["poolclass"] = NullPool
    else:
        options["pool_pre_ping"] = True

    return options


def ensure_sqlite_directory(database_url: str) -> None:
    """Create the folder of a file-based SQLite database if it is missing."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def configure_sqlite_connection(dbapi_connection, connection_record):
    """
    Configure SQLite connection with optimal settings for concurrency.
    Called on every new connection to the database.

    Settings:
    - WAL mode: Allows concurrent reads during the seed write
    - busy_timeout: Wait up to 30s for locks instead of immediate failure
    - foreign_keys: Enforce referential integrity and cascades
    - synchronous=NORMAL: Good balance of safety and performance with WAL
    - lower(): Replaced with Python's str.lower so case-insensitive search
      also folds non-ASCII letters (built-in lower() only folds ASCII)
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()
    dbapi_connection.create_function("lower", 1, _unicode_lower)


class Database:
    """
    Storage handle: one engine + one session factory per process.

    Lifecycle:
        db = Database(url)         # no connection is opened yet
        await db.ping()            # optional startup validation
        async with db.session() as session: ...
        await db.dispose()         # on shutdown
    """

    def __init__(self, database_url: str, is_production: bool = False):
        self.url = database_url
        self.is_sqlite = database_url.startswith("sqlite")
        self.engine = create_async_engine(
            database_url, **_get_engine_options(database_url, is_production)
        )

        if self.is_sqlite:
            ensure_sqlite_directory(database_url)
            # For aiosqlite, we need to use the sync_engine's pool events
            event.listen(self.engine.sync_engine, "connect", configure_sqlite_connection)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,  # Manual control over flushing
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Transactional session scope.
        Commits on success, rolls back on any exception.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create all tables from model metadata (local setups and tests)."""
        from app.core.db.registry import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """
        Verify database connection is working.
        Useful for health checks and startup validation.
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception:
            logger.exception("Database connectivity check failed")
            return False

    async def dispose(self) -> None:
        """Release all pooled connections."""
        await self.engine.dispose()


async def get_db_util(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database dependency for FastAPI.
    Opens one session per request from the handle stored on `app.state.db`.
    """
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session
