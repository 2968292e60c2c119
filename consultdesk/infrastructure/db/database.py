"""
Database configuration and session management.
"""

import logging
import time
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from consultdesk.config import settings
from consultdesk.domain.models.base import StoreError
from consultdesk.domain.repositories.unit_of_work import UnitOfWork


logger = logging.getLogger(__name__)

# Create declarative base
Base = declarative_base()


def _configure_sqlite(engine: Engine) -> None:
    """
    Enforce foreign keys and let SQLAlchemy own transaction boundaries,
    which pysqlite otherwise manages itself and breaks SAVEPOINT handling.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def _install_slow_query_logging(engine: Engine, threshold_ms: int) -> None:
    """Log statements that run longer than threshold_ms."""
    if threshold_ms <= 0:
        return

    @event.listens_for(engine, "before_cursor_execute")
    def _before(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _after(conn, cursor, statement, parameters, context, executemany):
        started = conn.info["query_start_time"].pop()
        elapsed_ms = (time.perf_counter() - started) * 1000
        if elapsed_ms > threshold_ms:
            logger.warning(f"Slow query ({elapsed_ms:.1f} ms): {' '.join(statement.split())[:300]}")


def create_db_engine(
    database_url: str,
    timeout_seconds: int = settings.db_timeout_seconds,
    slow_query_ms: int = settings.db_slow_query_ms,
    echo: bool = False
) -> Engine:
    """
    Build an engine with bounded waits: SQLite busy timeout, PostgreSQL
    connect and statement timeouts, pool checkout timeout.
    """
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": timeout_seconds}
        kwargs = {}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, connect_args=connect_args, echo=echo, **kwargs)
        _configure_sqlite(engine)
    else:
        connect_args = {}
        if database_url.startswith("postgresql"):
            connect_args = {
                "connect_timeout": timeout_seconds,
                "options": f"-c statement_timeout={timeout_seconds * 1000}",
            }
        engine = create_engine(
            database_url,
            connect_args=connect_args,
            pool_timeout=timeout_seconds,
            pool_pre_ping=True,
            echo=echo,
        )

    _install_slow_query_logging(engine, slow_query_ms)
    return engine


# Create SQLAlchemy engine
engine = create_db_engine(settings.database_url, echo=settings.debug)

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    Use cases commit through SQLAlchemyUnitOfWork; anything uncommitted is rolled back here.
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Commits the request session, translating store failures."""

    def __init__(self, session: Session):
        self.session = session

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Commit failed: {e}")
            raise StoreError() from e

    def rollback(self) -> None:
        self.session.rollback()
