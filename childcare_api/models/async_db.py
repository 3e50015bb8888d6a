"""
Async database connection management.

Provides the shared async engine and session factory, with SSL handling,
connection pooling, retry on engine creation and a connectivity check.
"""
import logging
import ssl
import os
from typing import Optional

from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type, before_sleep_log
from sqlalchemy.ext.asyncio import (
    AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
)
from sqlalchemy.exc import (
    OperationalError, InterfaceError, TimeoutError as SQLAlchemyTimeoutError
)
from sqlalchemy.sql import text

from .. import config
from .orm_models import Base

logger = logging.getLogger(__name__)

# Global state management
_engine: Optional[AsyncEngine] = None
_async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None

_retry_settings = config.get_retry_settings()


def create_ssl_context() -> Optional[ssl.SSLContext]:
    """SSL context for asyncpg, driven by ``DATABASE_SSLMODE``.

    ``disable`` (the default) connects in clear. ``verify-ca`` and
    ``verify-full`` check the server certificate against
    ``DATABASE_SSLROOTCERT``, the latter also checking the host name. Any
    other mode encrypts without verifying the server.
    """
    sslmode = os.getenv("DATABASE_SSLMODE", "disable").lower()
    if sslmode == "disable":
        return None

    logger.info(f"Database SSL mode: {sslmode}")
    if sslmode in ("verify-ca", "verify-full"):
        ssl_context = ssl.create_default_context(cafile=os.getenv("DATABASE_SSLROOTCERT"))
        ssl_context.check_hostname = sslmode == "verify-full"
        return ssl_context

    ssl_context = ssl.create_default_context()
    ssl_context.check_hostname = False
    ssl_context.verify_mode = ssl.CERT_NONE
    return ssl_context


def get_connect_args(database_url: str) -> dict:
    """Get driver connection arguments for the given database URL."""
    if not database_url.startswith("postgresql+asyncpg"):
        return {}

    connect_args = {
        "server_settings": {
            "application_name": f"childcare-api-{os.getpid()}",
        }
    }

    ssl_context = create_ssl_context()
    if ssl_context:
        connect_args["ssl"] = ssl_context

    timeout = int(os.getenv("DB_CONNECT_TIMEOUT", "30"))
    if timeout > 0:
        connect_args["timeout"] = timeout

    return connect_args


@retry(
    stop=stop_after_attempt(_retry_settings["attempts"]),
    wait=wait_exponential(multiplier=1, min=_retry_settings["min_delay"], max=_retry_settings["max_delay"]),
    retry=retry_if_exception_type((OperationalError, InterfaceError, SQLAlchemyTimeoutError)),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True
)
def create_engine_with_retry() -> AsyncEngine:
    """Create the async SQLAlchemy engine, retrying on transient connection errors.

    Raises:
        SQLAlchemyError: If engine creation fails after retries
    """
    global _engine

    if _engine is not None:
        return _engine

    database_url = config.get_database_url()
    try:
        _engine = create_async_engine(
            database_url,
            connect_args=get_connect_args(database_url),
            **config.get_engine_options()
        )
        logger.info("Database engine created successfully")
        return _engine
    except Exception as e:
        logger.error(f"Failed to create database engine: {e}", exc_info=True)
        _engine = None
        raise


def get_engine() -> AsyncEngine:
    """Get or create the async database engine."""
    if _engine is None:
        return create_engine_with_retry()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the async session factory."""
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            bind=get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )
    return _async_session_factory


class AsyncSessionManager:
    """Async context manager for database sessions.

    Commits on a clean exit, rolls back when the block raises.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self.session_factory = session_factory
        self.session = None

    async def __aenter__(self) -> AsyncSession:
        factory = self.session_factory or get_session_factory()
        self.session = factory()
        return self.session

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            try:
                if exc_type is not None:
                    await self.session.rollback()
                else:
                    await self.session.commit()
            finally:
                await self.session.close()


def get_async_session(session_factory: Optional[async_sessionmaker[AsyncSession]] = None) -> AsyncSessionManager:
    """Get an async database session manager."""
    return AsyncSessionManager(session_factory)


async def init_db(create_tables: bool = False) -> None:
    """Validate database connectivity, optionally creating the schema.

    Raises:
        RuntimeError: If database health check fails
    """
    try:
        engine = get_engine()
        async with engine.begin() as conn:
            result = await conn.execute(text("SELECT 1"))
            if result.scalar() != 1:
                raise RuntimeError("Database health check failed")
            if create_tables:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Database connection successful")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise RuntimeError(f"Database health check failed: {e}") from e


async def close_db() -> None:
    """Close database connections and clean up resources."""
    global _engine, _async_session_factory

    if _engine:
        await _engine.dispose()
        logger.info("Database engine disposed")
        _engine = None

    _async_session_factory = None
