"""Engine and session-factory construction.

Nothing here is global: the API application and each CLI command build
their own engine from Settings and hand the session factory down.
"""

from __future__ import annotations

import structlog
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.infrastructure.persistence.models import Base
from storefront.infrastructure.settings import Settings

logger = structlog.get_logger(__name__)


def create_database_engine(settings: Settings) -> Engine:
    """Create an engine for ``settings.DATABASE_URL``.

    SQLite gets thread-sharing enabled (FastAPI serves sync endpoints from
    a thread pool) and foreign-key enforcement switched on; an in-memory
    SQLite database is pinned to a single connection so every session
    sees the same data.  Server databases get a bounded QueuePool.
    """
    url = make_url(settings.DATABASE_URL)

    if url.get_backend_name() == "sqlite":
        engine_config: dict = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            engine_config["poolclass"] = StaticPool
        engine = create_engine(url, echo=settings.DB_ECHO, **engine_config)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    else:
        engine = create_engine(
            url,
            echo=settings.DB_ECHO,
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    logger.debug("Database engine created", backend=url.get_backend_name())
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


def init_database(engine: Engine) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(engine)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
