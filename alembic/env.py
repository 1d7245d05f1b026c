from logging.config import fileConfig
from sqlalchemy import engine_from_config
from sqlalchemy import pool
from alembic import context
import sys
from pathlib import Path

# ============================================================
# Make the saarthi package importable
# ============================================================
sys.path.append(str(Path(__file__).resolve().parents[1]))

from saarthi.core.config import settings
from saarthi.db.database import Base

# Import ALL models here so Alembic knows about them
from saarthi.models.user import User  # noqa: F401
from saarthi.models.profile import Profile  # noqa: F401
from saarthi.models.quiz_result import QuizResult  # noqa: F401

# ============================================================
# Alembic Config
# ============================================================

config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set target metadata for autogenerate
target_metadata = Base.metadata

# Alembic runs synchronously: swap the async drivers for their sync ones
_SYNC_DRIVERS = {
    "postgresql+asyncpg://": "postgresql://",
    "sqlite+aiosqlite://": "sqlite://",
}


def sync_database_url() -> str:
    database_url = str(settings.DATABASE_URL)
    for async_prefix, sync_prefix in _SYNC_DRIVERS.items():
        if database_url.startswith(async_prefix):
            return sync_prefix + database_url[len(async_prefix):]
    return database_url


config.set_main_option("sqlalchemy.url", sync_database_url())


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        {"sqlalchemy.url": sync_database_url()},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
