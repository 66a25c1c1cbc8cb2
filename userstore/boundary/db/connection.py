"""
Database connection management.

Owns the process-wide SQLAlchemy engine and session factory. Both are
created lazily on first use under a lock, so concurrent first callers
always share a single engine.

Dependencies: sqlalchemy, userstore.configs
System role: Database connection lifecycle management
"""

import threading
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool, StaticPool

from userstore.configs import DatabaseSettings, get_settings
from userstore.observability.log_utils import redact_url
from userstore.observability.logger import get_logger

logger = get_logger(__name__)

_lock = threading.Lock()
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _connect_args(db_config: DatabaseSettings) -> dict[str, Any]:
    """Driver arguments carrying the per-statement timeout."""
    if db_config.is_sqlite:
        # sqlite3 only knows a lock wait timeout, in seconds
        return {
            "check_same_thread": False,
            "timeout": db_config.statement_timeout_ms / 1000,
        }
    if db_config.database_url.startswith("postgresql"):
        if db_config.statement_timeout_ms:
            return {"options": f"-c statement_timeout={db_config.statement_timeout_ms}"}
    return {}


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.database in (None, "", ":memory:") or parsed.query.get("mode") == "memory"


def _create_engine(db_config: DatabaseSettings) -> Engine:
    if db_config.is_sqlite:
        # An in-memory database lives only as long as its one connection;
        # file databases get a fresh connection per session
        poolclass = StaticPool if _is_memory_sqlite(db_config.database_url) else NullPool
        return create_engine(
            db_config.database_url,
            echo=db_config.echo_sql,
            poolclass=poolclass,
            connect_args=_connect_args(db_config),
        )

    return create_engine(
        db_config.database_url,
        echo=db_config.echo_sql,
        poolclass=QueuePool,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,  # Verify connections before using
        connect_args=_connect_args(db_config),
    )


def get_engine() -> Engine:
    """
    Return the shared SQLAlchemy engine, creating it on first call.

    SQLAlchemy surfaces every driver failure as an exception, so callers
    never have to inspect return codes.

    Returns:
        Engine: Process-wide engine bound to the configured store

    Raises:
        ArgumentError: If the database URL is invalid

    Usage:
        engine = get_engine()
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    """
    global _engine
    if _engine is not None:
        return _engine

    with _lock:
        if _engine is None:
            db_config = get_settings().database
            _engine = _create_engine(db_config)
            logger.info("Created database engine for %s", redact_url(db_config.database_url))
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """
    Return the shared session factory, creating it on first call.

    Sessions use autoflush=False and keep loaded attributes after commit;
    transaction boundaries are always explicit.

    Returns:
        sessionmaker: Session factory bound to get_engine()

    Usage:
        SessionFactory = get_session_factory()
        with SessionFactory() as session, session.begin():
            session.add(obj)
    """
    global _session_factory
    if _session_factory is not None:
        return _session_factory

    engine = get_engine()
    with _lock:
        if _session_factory is None:
            _session_factory = sessionmaker(
                bind=engine,
                autoflush=False,
                expire_on_commit=False,
            )
    return _session_factory



def shares_connection(session_factory: sessionmaker[Session]) -> bool:
    """
    Tell whether every session from ``session_factory`` uses one connection.

    Sessions on such an engine see each other's uncommitted work, and
    closing any of them rolls the shared connection back.

    Args:
        session_factory: Factory whose bound engine is inspected

    Returns:
        bool: True when the engine pools a single static connection
    """
    bind = session_factory.kw.get("bind")
    return isinstance(getattr(bind, "pool", None), StaticPool)
