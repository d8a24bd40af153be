"""
Alembic environment for the analytics schema.

- The database URL comes from the application settings (DATABASE_URL / .env)
- Migrations run through an async engine (aiosqlite or asyncpg)
- SQLite uses batch mode, since it cannot ALTER most table properties
"""

import asyncio
from logging.config import fileConfig
from sqlalchemy import pool, event
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from alembic import context

from app.core.config import config as settings
from app.core.db.engine import configure_sqlite_connection, ensure_sqlite_directory

# Import all models so autogenerate sees the full metadata
from app.core.db.registry import Base

config = context.config

db_url = settings.database_url
is_sqlite = db_url.startswith("sqlite")

ensure_sqlite_directory(db_url)

config.set_main_option("sqlalchemy.url", db_url)

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit migration SQL without connecting (alembic upgrade --sql)."""
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        render_as_batch=is_sqlite,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=is_sqlite,
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    connectable = create_async_engine(db_url, poolclass=pool.NullPool)

    if is_sqlite:
        event.listen(connectable.sync_engine, "connect", configure_sqlite_connection)

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
