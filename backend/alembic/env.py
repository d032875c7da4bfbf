"""Alembic environment — async migrations for the Courier schema.

Design Decisions:
    - URL precedence: DATABASE_URL, then alembic.ini; both go through
      normalize_database_url so migrations and the app hit the same driver
    - Settings is not loaded: migrations must run without JWT_SECRET
    - SQLite targets use batch mode, since SQLite cannot ALTER constraints
      such as the unique sessions.username in place
"""

import asyncio
import os
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from courier.config import normalize_database_url
from courier.db.base import Base
import courier.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

DATABASE_URL = normalize_database_url(
    os.environ.get("DATABASE_URL") or config.get_main_option("sqlalchemy.url"),
)


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        render_as_batch=DATABASE_URL.startswith("sqlite"),
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = create_async_engine(DATABASE_URL, poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(_configure_connection)
    await engine.dispose()


def _configure_connection(connection: Connection) -> None:
    _configure(connection=connection)


if context.is_offline_mode():
    _configure(
        url=DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_run_online())
