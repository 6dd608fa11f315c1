"""
ITR API: Database Session Management
====================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   One async engine (and therefore one connection pool) per process.
       Each request gets its own session through `get_db_session`, which
       commits on success, rolls back on error and always closes.
Who:   Route handlers receive sessions via FastAPI's dependency injection;
       the application lifespan calls the lifecycle helpers.

Connection Pooling:
    pool_size / max_overflow come from settings (DB_POOL_SIZE,
    DB_MAX_OVERFLOW). pool_pre_ping validates a connection before use and
    pool_recycle=3600 replaces connections older than an hour.
    SQLite URLs (local development, tests) use the dialect's default pool.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from itr_api.config import settings


def _engine_options() -> Dict[str, Any]:
    """Keyword arguments for create_async_engine based on the configured backend."""
    options: Dict[str, Any] = {
        # SQL echo is only useful while debugging
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine: AsyncEngine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False keeps loaded attributes readable after the
# dependency commits, when the response is being serialized
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back, then re-raises for the exception handlers
        5. Always: closes the session (returns the connection to the pool)

    Example usage in a route:
        @router.get("/v1/findall")
        async def find_all(db: AsyncSession = Depends(get_db_session)):
            return await employee_store.find_all(db)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def verify_connection(bind: AsyncEngine = engine) -> None:
    """
    Runs SELECT 1 against the database.

    Called at startup (fatal on failure) and by the health endpoint.
    Driver exceptions propagate to the caller unchanged.
    """
    async with bind.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Creates every table registered on Base.metadata that does not exist yet."""
    # Model modules must be imported so their tables are registered
    from itr_api.models import employee  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Closes all pooled connections. Called during application shutdown."""
    await engine.dispose()
