"""
ScatterBrain Backend - Database Engine & Session Management
===========================================================

What:  Async SQLAlchemy engine factory, session factory, declarative base,
       transactional session scope, and a portable "database clock".
How:   `build_engine()` creates an AsyncEngine with connection pooling.
       Storage components receive an `async_sessionmaker` bound to that engine
       and open one `session_scope()` per operation: commit on success,
       roll back on any error, always close.
Who:   Used by ThoughtProcessor (engine + sessions) and every storage class.

Connection Pooling Strategy (server databases):
    pool_size:        Persistent connections for normal load
    max_overflow:     Temporary connections for traffic spikes
    pool_pre_ping:    Validates connections before use
    pool_recycle=3600: Recycles connections every hour

SQLite (tests and local runs) keeps SQLAlchemy's default pool and gets
foreign-key enforcement switched on for every new connection.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import DateTime, event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql.expression import FunctionElement

from scatterbrain.config import Settings, settings as default_settings


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every table registers with this shared metadata; each storage component
    creates only its own table from it during initialization.
    """
    pass


# ── Database Clock ────────────────────────────────────────────────────────
class utcnow(FunctionElement):
    """
    Current UTC time as computed by the database server.

    Renders as a naive UTC timestamp on every supported dialect. All calls
    inside one statement yield the same value, so a row inserted with
    `create_time=utcnow(), update_time=utcnow()` gets equal timestamps.
    """
    type = DateTime()
    inherit_cache = True


@compiles(utcnow)
def _default_utcnow(element, compiler, **kw):
    return "CURRENT_TIMESTAMP"


@compiles(utcnow, "postgresql")
def _pg_utcnow(element, compiler, **kw):
    return "TIMEZONE('utc', CURRENT_TIMESTAMP)"


@compiles(utcnow, "sqlite")
def _sqlite_utcnow(element, compiler, **kw):
    # Millisecond clock padded to six fractional digits; CURRENT_TIMESTAMP has whole seconds only.
    return "STRFTIME('%Y-%m-%d %H:%M:%f000', 'now')"


# ── Engine Configuration ──────────────────────────────────────────────────
def build_engine(
    database_url: Optional[str] = None,
    config: Settings = default_settings,
) -> AsyncEngine:
    """
    Create the async engine that owns the connection pool.

    Args:
        database_url: Overrides `config.database_url` (used by tests).
        config:       Settings providing pool sizing and log level.

    Returns:
        A ready AsyncEngine. No connection is opened until first use.
    """
    url = make_url(database_url or config.database_url)
    echo = config.log_level == "DEBUG"

    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(url, echo=echo)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_async_engine(
        url,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=config.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores REFERENCES clauses unless this pragma is set per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory shared by all storage components.

    expire_on_commit=False keeps returned rows readable after the
    transaction that produced them has committed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Transactional Scope ───────────────────────────────────────────────────
@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    One transaction per storage operation.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the storage method, which issues its statements
        3. On success: commits the transaction
        4. On error: rolls back, so no partial write becomes visible
        5. Always: closes the session (returns connection to pool)

    Example:
        async with session_scope(self._sessions) as session:
            await session.execute(insert(Thought).values(...))
            await session.execute(insert(ThoughtLabel).values(...))
    """
    session = factory()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
