# @TASK P0-T0.3 - 악보 카탈로그 스키마 마이그레이션 환경

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from alembic import context
from sheetshare.config import get_settings
from sheetshare.database import Base

config = context.config

# sqlalchemy.url always comes from DATABASE_URL
config.set_main_option("sqlalchemy.url", get_settings().async_database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

import sheetshare.models  # noqa: F401, E402

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    # compare_type so autogenerate also sees column length changes
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)


def run_migrations_offline() -> None:
    """Write the catalog schema DDL as SQL without touching a database."""
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    # SQLite (local and test databases) needs batch mode for ALTER TABLE
    _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")

    with context.begin_transaction():
        context.run_migrations()


async def migrate_catalog_schema() -> None:
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(migrate_catalog_schema())
