"""Database session configuration."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from passclub.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import passclub.models  # noqa: E402,F401

_database_url = settings.effective_database_url

# Request handlers run on a thread pool, so SQLite connections must cross threads.
_connect_args = {"check_same_thread": False} if _database_url.startswith("sqlite") else {}

engine = create_engine(
    _database_url,
    connect_args=_connect_args,
    pool_pre_ping=True,
    echo=settings.sql_debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables and their indexes."""
    Base.metadata.create_all(bind=engine)


def ping() -> None:
    """Run a trivial query; raises if the store is unreachable."""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
