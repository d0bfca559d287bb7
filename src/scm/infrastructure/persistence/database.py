"""Engine and session factory for the relational store."""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()

POOL_SIZE = 5
MAX_OVERFLOW = 5
SQLITE_BUSY_TIMEOUT = 30


def create_db_engine(url: str, echo: bool = False) -> Engine:
    if url.startswith("sqlite"):
        kwargs: dict = {
            "connect_args": {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        }
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)
        _serialize_sqlite_writers(engine)
        return engine

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=POOL_SIZE,
        max_overflow=MAX_OVERFLOW,
        pool_timeout=30,
    )


def _serialize_sqlite_writers(engine: Engine) -> None:
    """SQLite has no row locks; take the database write lock at BEGIN instead.

    pysqlite's own transaction handling is disabled so SQLAlchemy's
    ``begin`` event controls the BEGIN statement.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    # Table classes register themselves on Base when imported.
    from scm.infrastructure.persistence import orm  # noqa: F401

    Base.metadata.create_all(bind=engine)
