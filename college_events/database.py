"""Database handle and session management for College Events API."""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""

    pass


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the configured database URL.

    SQLite URLs get a thread-tolerant connection (FastAPI runs sync
    endpoints in a worker pool); in-memory SQLite also shares a single
    connection so every session sees the same data.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=echo,
    )


class Database:
    """
    Process-wide persistence handle.

    Created once at startup, stored on ``app.state`` and disposed at
    shutdown. Nothing holds it as module-level state, so tests can hand the
    application a different engine.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.engine = build_engine(database_url, echo=echo)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def create_tables(self) -> None:
        """Create all tables and indexes (users.email unique, events.search_terms)."""
        # Imported for its side effect of registering the mapped tables
        import college_events.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ready")

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")


def get_db(request: Request) -> Generator[Session, Any, None]:
    """
    Dependency that provides a database session.

    Yields a session from the application's database handle and ensures it
    is closed after use.
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
