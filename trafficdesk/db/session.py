"""SQLAlchemy engine, session factory and declarative base."""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ..core.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> Engine:
    """Turn on foreign key enforcement for every new SQLite connection.

    SQLite ships with enforcement off, which would silently skip both the
    ticket -> user reference check and the cascade on user deletion.
    """

    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ARG001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


# ``check_same_thread=False`` lets FastAPI's threadpool share SQLite connections.
CONNECT_ARGS = {"check_same_thread": False} if settings.is_sqlite else {}

engine = enable_sqlite_foreign_keys(
    create_engine(settings.DB_URL, connect_args=CONNECT_ARGS, echo=settings.DB_ECHO)
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """FastAPI dependency that yields a session and guarantees cleanup."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
