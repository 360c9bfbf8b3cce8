"""
Notekeeper Backend - Alembic Migration Environment
=====================================================

What:  Applies the schema for the `users` and `notes` tables (revision 001
       onwards) to the database named by DATABASE_URL.
How:   Reads the URL from notekeeper.config.settings, compares against
       notekeeper.database.Base.metadata (User and Note, including the
       UTCDateTime timestamp columns), and runs migrations on an async
       connection via connection.run_sync().
Who:   Run as `alembic upgrade head` before the first server start.

SQLite:
    Local and test databases use SQLite, which cannot ALTER most columns in
    place; batch mode is switched on for that dialect so future revisions
    touching `notes` or `users` rebuild the table instead.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from notekeeper.config import settings
from notekeeper.database import Base

# Registers every table with Base.metadata for --autogenerate
import notekeeper.models  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Single source of truth for the database URL
config.set_main_option("sqlalchemy.url", settings.database_url)


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout without connecting to the database."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=connection.dialect.name == "sqlite",
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Connect with a non-pooled async engine and apply pending migrations."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
