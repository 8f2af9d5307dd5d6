# crm/core/db.py

import ssl
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from crm.core.config import (
    DATABASE_URL,
    DB_TYPE,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    APP_ENV,
)
from crm.core.exceptions import StorageError
from crm.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


# =====================================================
# ENGINE
# =====================================================
def _engine_options(db_type: str) -> dict:
    """Driver and pool arguments for the configured backend."""
    if db_type == "sqlite":
        # aiosqlite runs the connection in a worker thread
        return {"connect_args": {"check_same_thread": False}}

    ssl_ctx = ssl.create_default_context()
    if not DB_SSL_VERIFY:
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    return {
        "connect_args": {"ssl": ssl_ctx},
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    **_engine_options(DB_TYPE),
)

if DB_TYPE == "sqlite":
    @event.listens_for(engine.sync_engine, "connect")
    def enable_sqlite_foreign_keys(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


# =====================================================
# SESSION HELPERS
# =====================================================
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


async def flush_or_raise(db: AsyncSession) -> None:
    try:
        await db.flush()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Flush failed")
        raise StorageError() from exc


async def commit_or_raise(db: AsyncSession) -> None:
    """Commit the unit of work; roll back and raise StorageError on failure."""
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Commit failed")
        raise StorageError() from exc


# registers every mapped class on Base.metadata
import crm.models  # noqa: E402,F401


async def init_models():
    """Create missing tables. Development only; other environments migrate."""
    if APP_ENV != "development":
        raise RuntimeError("init_models() is forbidden outside development")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
