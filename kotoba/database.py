"""Engine and per-request sessions for the progress database."""

from collections.abc import Iterator
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from kotoba.config import Settings, get_settings


class Base(DeclarativeBase):
    """Declarative base of the catalog and progress tables."""


# Created once per process by initialize_database()
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def enable_sqlite_write_locking(engine: Engine) -> None:
    """
    Make every SQLite transaction start with BEGIN IMMEDIATE.

    pysqlite defers BEGIN until the first write, so a read followed by a write
    in one transaction does not hold a lock in between. Taking the write lock
    up front serializes transactions across connections, which is what
    SELECT ... FOR UPDATE gives on PostgreSQL.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection: Any, _record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn: Connection) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_database_engine(settings: Settings) -> Engine:
    """Build the engine for the configured database."""
    url = make_url(settings.DATABASE_URL)

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            # One shared connection keeps the in-memory database alive
            return create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        engine = create_engine(url, connect_args={"check_same_thread": False})
        enable_sqlite_write_locking(engine)
        return engine

    options = (
        f"-c lock_timeout={settings.DATABASE_LOCK_TIMEOUT_MS} "
        f"-c statement_timeout={settings.DATABASE_STATEMENT_TIMEOUT_MS}"
    )
    return create_engine(
        url,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        # Below common server-side idle limits
        pool_recycle=1800,
        connect_args={"options": options},
    )


def initialize_database(settings: Settings) -> None:
    """Create the process-wide engine and session factory."""
    global _engine, _session_factory  # noqa: PLW0603
    _engine = create_database_engine(settings)
    _session_factory = sessionmaker(bind=_engine, autoflush=False)


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("initialize_database() has not been called")
    return _engine


def create_tables() -> None:
    """Create all tables that do not exist yet."""
    # Register the models on Base.metadata
    import kotoba.models  # noqa: F401, PLC0415

    Base.metadata.create_all(bind=get_engine())


def get_session_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> sessionmaker[Session]:
    if _session_factory is None:
        # Requests served without the app lifespan, e.g. by scripts
        initialize_database(settings)
    if _session_factory is None:
        raise RuntimeError("Database session factory is unavailable")
    return _session_factory


def dispose_engine() -> None:
    """Close pooled connections at shutdown."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is None:
        return
    _engine.dispose()
    _engine, _session_factory = None, None


def get_db(
    session_factory: Annotated[sessionmaker[Session], Depends(get_session_factory)],
) -> Iterator[Session]:
    """One session per request, closed when the response is sent."""
    with session_factory() as db:
        yield db


DatabaseSession = Annotated[Session, Depends(get_db)]
