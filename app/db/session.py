# app/db/session.py
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from app.core.config import settings


def _enable_sqlite_fks(dbapi_conn, _record) -> None:
    # SQLite no aplica ON DELETE CASCADE ni FKs si no se activa por conexión
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(db_url: str) -> AsyncEngine:
    """
    Crea el engine async según el driver de la URL.
    Timeouts cortos: si la DB no responde → falla rápido (5s).
    """
    if db_url.startswith("sqlite+aiosqlite"):
        # sin pool: cada sesión abre su conexión (sirve también en tests)
        engine = create_async_engine(db_url, poolclass=NullPool)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_fks)
        return engine

    if db_url.startswith("postgresql+psycopg"):
        connect_args = {"connect_timeout": 5}
    elif db_url.startswith("postgresql+asyncpg"):
        connect_args = {
            "timeout": 5,
            "server_settings": {"client_encoding": "UTF8"},
        }
    else:
        connect_args = {}

    return create_async_engine(
        db_url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=5,
        max_overflow=10,
        connect_args=connect_args,
    )


engine = build_engine(settings.DATABASE_URL)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
