from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from moneytree.config import settings


def engine_options(database_url: str) -> dict:
    """Driver-specific keyword arguments for ``create_async_engine``."""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


def enforce_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on SQLite's foreign key checks for every new connection.

    SQLite ignores ``ON DELETE RESTRICT`` and ``CASCADE`` unless the pragma is
    set per connection. Other backends are left untouched.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# SQL echo is only honoured in development: bound parameters carry amounts
# and descriptions.
async_engine = create_async_engine(
    settings.database_url,
    echo=(settings.db_echo if settings.app_env.lower() == "development" else False),
    **engine_options(settings.database_url),
)
enforce_sqlite_foreign_keys(async_engine)

AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session
