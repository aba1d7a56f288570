"""
Database configuration and session management for the Inventory service.

This module sets up the database connection using SQLAlchemy and provides
a session factory for database operations. Sessions are always handed out
explicitly, either through the ``get_db`` FastAPI dependency or the
``session_scope`` context manager, and are closed on every exit path.
"""
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import DATABASE_URL, SQL_ECHO

# SQLite connections are shared across the threadpool FastAPI runs sync routes on
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine       = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base         = declarative_base()


def init_db() -> None:
    """Create the inventory tables if they do not exist yet."""
    from . import models  # noqa: F401  registers the mappers on Base

    Base.metadata.create_all(bind=engine)


def get_db():
    """
    Dependency function that provides a database session.
    
    Yields:
        Session: SQLAlchemy database session
        
    Usage:
        Use as a FastAPI dependency to inject database sessions into route handlers.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Provide a session for code running outside a request.

    Usage:
        with session_scope() as db:
            InventoryService(db).summary()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
