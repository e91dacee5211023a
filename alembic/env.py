# alembic/env.py
from __future__ import annotations

import sys
from pathlib import Path
from logging.config import fileConfig

from sqlalchemy import create_engine
from alembic import context

# --- Añade el project root al PYTHONPATH ---
BASE_DIR = Path(__file__).resolve().parents[1]  # repo root
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from app.core.config import settings
from app.db.base import Base
# registra todas las tablas en Base.metadata
from app.users.models import User  # noqa: F401
from app.posts.models import Post  # noqa: F401
from app.likes.models import Like  # noqa: F401
from app.comments.models import Comment  # noqa: F401
from app.follows.models import Follow  # noqa: F401

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _sync_url(url: str) -> str:
    """
    Alembic usa motor SÍNCRONO con psycopg3:
    +asyncpg → +psycopg, sin sufijo → +psycopg, sqlite+aiosqlite → sqlite.
    """
    if url.startswith("sqlite+aiosqlite"):
        return url.replace("+aiosqlite", "", 1)
    if "+asyncpg" in url:
        return url.replace("+asyncpg", "+psycopg")
    if "+psycopg" in url:
        return url
    return url.replace("postgresql://", "postgresql+psycopg://", 1)


def run_migrations_offline():
    context.configure(
        url=_sync_url(settings.DATABASE_URL),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = create_engine(_sync_url(settings.DATABASE_URL))
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
